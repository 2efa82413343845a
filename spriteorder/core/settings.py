"""User-facing settings - persisted to ~/.config/spriteorder/settings.json.

Covers logging verbosity, the undo history depth and the template used to
name freshly created groups.
"""

import json
from pathlib import Path

from .log import get_logger

CONFIG_PATH = Path.home() / '.config' / 'spriteorder' / 'settings.json'

DEFAULTS = {
    'log_level': 'INFO',
    'undo_max_size': 100,
    'group_name_template': '{name} group',
}

log = get_logger(__name__)


class Settings:
    def __init__(self, path=None):
        self.path = Path(path) if path else CONFIG_PATH
        self.log_level: str = DEFAULTS['log_level']
        self.undo_max_size: int = DEFAULTS['undo_max_size']
        self.group_name_template: str = DEFAULTS['group_name_template']
        self._load()

    def _load(self):
        if not self.path.exists():
            return
        try:
            with open(self.path, encoding='utf-8') as f:
                d = json.load(f)
            self.log_level = str(d.get('log_level', self.log_level)).upper()
            self.undo_max_size = max(1, int(d.get('undo_max_size', self.undo_max_size)))
            self.group_name_template = str(d.get('group_name_template', self.group_name_template))
        except (OSError, ValueError, TypeError, AttributeError) as e:
            log.warning(f"[Settings] Could not read {self.path}, keeping defaults: {e}")

    def group_name(self, sprite_name: str) -> str:
        """Default display name for a group led by `sprite_name`."""
        try:
            return self.group_name_template.format(name=sprite_name)
        except (KeyError, IndexError, ValueError):
            return DEFAULTS['group_name_template'].format(name=sprite_name)

    def to_dict(self) -> dict:
        return {
            'log_level': self.log_level,
            'undo_max_size': self.undo_max_size,
            'group_name_template': self.group_name_template,
        }

    def save(self):
        """Persist current settings to the user config file."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump(self.to_dict(), f, indent=2)
        except OSError as e:
            log.warning(f"[Settings] Could not write {self.path}: {e}")
