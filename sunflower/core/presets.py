"""
Scene Presets Library - Named stem/sun configurations
Lets users switch the feel of the scene with a single flag
"""

import logging
import yaml
from collections import ChainMap
from pathlib import Path
from typing import Dict, List, Optional, Any
from dataclasses import dataclass, field, asdict, replace, fields

from .config import SceneConfig

logger = logging.getLogger(__name__)


# ============================================================================
# Preset Data Structures
# ============================================================================

@dataclass
class ScenePreset:
    """A single scene preset; None fields keep the base config's value"""

    name: str
    description: str = ""

    # Sun motion
    stiffness: Optional[float] = None
    damping: Optional[float] = None

    # Chain
    segment_count: Optional[int] = None
    base_segment_length: Optional[float] = None

    # Gap slider
    gap: Optional[float] = None
    min_gap: Optional[float] = None
    max_gap: Optional[float] = None

    # Recording
    motion: str = "orbit"
    frames: int = 120

    tags: List[str] = field(default_factory=list)

    # Fields copied onto a SceneConfig
    SCENE_FIELDS = (
        'stiffness', 'damping', 'segment_count', 'base_segment_length',
        'gap', 'min_gap', 'max_gap',
    )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for YAML serialization"""
        return {k: v for k, v in asdict(self).items() if v is not None and v != []}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ScenePreset':
        """Create from dictionary, ignoring unknown keys"""
        valid_fields = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in data.items() if k in valid_fields}
        return cls(**filtered)

    def apply_to_config(self, config: SceneConfig = None) -> SceneConfig:
        """Return a copy of `config` with this preset's settings applied"""
        config = config or SceneConfig()
        overrides = {
            name: getattr(self, name)
            for name in self.SCENE_FIELDS
            if getattr(self, name) is not None
        }
        return replace(config, **overrides).validate()


# ============================================================================
# Built-in Presets
# ============================================================================

BUILTIN_PRESETS: Dict[str, Dict[str, Any]] = {
    "classic": {
        "name": "classic",
        "description": "The original sketch: 10 segments, quick sun with slight overshoot",
        "stiffness": 0.4,
        "damping": 0.6,
        "motion": "orbit",
        "tags": ["default", "calm"],
    },

    "lazy_sun": {
        "name": "lazy_sun",
        "description": "Sun drifts slowly after the pointer, no overshoot",
        "stiffness": 0.1,
        "damping": 0.5,
        "motion": "sweep",
        "frames": 180,
        "tags": ["calm", "slow"],
    },

    "snappy_sun": {
        "name": "snappy_sun",
        "description": "Sun tracks the pointer almost exactly",
        "stiffness": 0.8,
        "damping": 0.4,
        "motion": "sweep",
        "tags": ["fast"],
    },

    "bouncy_sun": {
        "name": "bouncy_sun",
        "description": "Springy sun that rings before it settles",
        "stiffness": 0.3,
        "damping": 0.85,
        "motion": "fixed",
        "frames": 90,
        "tags": ["spring", "fast"],
    },

    "tall_stem": {
        "name": "tall_stem",
        "description": "Long 16-segment stem with short links",
        "segment_count": 16,
        "base_segment_length": 32.0,
        "motion": "orbit",
        "frames": 180,
        "tags": ["stem"],
    },

    "wide_gap": {
        "name": "wide_gap",
        "description": "Flower head held far out on its last link",
        "gap": 160.0,
        "motion": "orbit",
        "tags": ["stem", "gap"],
    },
}


# ============================================================================
# Preset Library
# ============================================================================

def read_preset_file(path: Path) -> Dict[str, ScenePreset]:
    """
    Parse one YAML preset file.

    A file holds either a single preset (named after the file) or several
    under a top-level `presets:` mapping.
    """
    with open(path, 'r') as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ValueError(f"expected a mapping, got {type(data).__name__}")

    entries = data['presets'] if 'presets' in data else {path.stem: data}
    return {
        name: ScenePreset.from_dict({**body, 'name': name})
        for name, body in entries.items()
    }


class PresetManager:
    """
    Built-in presets plus YAML files from a user directory.

    A user preset shadows the built-in preset of the same name.
    """

    def __init__(self, user_presets_dir: Optional[Path] = None):
        self.user_presets_dir = Path(user_presets_dir) if user_presets_dir else Path.home() / '.sunflower' / 'presets'

        self._builtin = {name: ScenePreset.from_dict(data) for name, data in BUILTIN_PRESETS.items()}
        self._user: Dict[str, ScenePreset] = {}
        self._sources: Dict[str, Path] = {}
        self._presets = ChainMap(self._user, self._builtin)

        self.reload()

    def reload(self) -> None:
        """Re-read the user directory; unreadable files are skipped with a warning"""
        self._user.clear()
        self._sources.clear()
        if not self.user_presets_dir.is_dir():
            return

        for path in sorted(self.user_presets_dir.glob('*.yaml')):
            try:
                loaded = read_preset_file(path)
            except (OSError, yaml.YAMLError, ValueError, TypeError, AttributeError) as e:
                logger.warning(f"Skipping preset file {path}: {e}")
                continue
            self._user.update(loaded)
            self._sources.update({name: path for name in loaded})

        logger.debug(f"Loaded {len(self._user)} user presets from {self.user_presets_dir}")

    # ------------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------------

    def get(self, name: str) -> Optional[ScenePreset]:
        return self._presets.get(name)

    def require(self, name: str) -> ScenePreset:
        """Like get(), but raises ValueError for unknown names"""
        preset = self.get(name)
        if preset is None:
            raise ValueError(f"Unknown preset '{name}'. Available: {', '.join(self.list_all())}")
        return preset

    def exists(self, name: str) -> bool:
        return name in self._presets

    def is_builtin(self, name: str) -> bool:
        return name in self._builtin and name not in self._user

    def list_all(self) -> List[str]:
        return sorted(self._presets)

    def list_by_tag(self, tag: str) -> List[str]:
        tag = tag.lower()
        return sorted(
            name for name, preset in self._presets.items()
            if tag in (t.lower() for t in preset.tags)
        )

    def list_tags(self) -> List[str]:
        return sorted({tag for preset in self._presets.values() for tag in preset.tags})

    def search(self, query: str) -> List[str]:
        """Case-insensitive match against name, description and tags"""
        query = query.lower()

        def matches(name: str, preset: ScenePreset) -> bool:
            text = [name, preset.description, *preset.tags]
            return any(query in part.lower() for part in text)

        return sorted(name for name, preset in self._presets.items() if matches(name, preset))

    # ------------------------------------------------------------------------
    # User presets on disk
    # ------------------------------------------------------------------------

    def save_preset(self, preset: ScenePreset, filename: Optional[str] = None) -> Path:
        """Write `preset` to the user directory (as <name>.yaml unless given)"""
        stem = Path(filename).stem if filename else preset.name
        self.user_presets_dir.mkdir(parents=True, exist_ok=True)
        path = self.user_presets_dir / f"{stem}.yaml"

        payload = preset.to_dict()
        if stem != preset.name:
            payload = {'presets': {preset.name: payload}}
        with open(path, 'w') as f:
            yaml.safe_dump(payload, f, default_flow_style=False, sort_keys=False)

        self._user[preset.name] = preset
        self._sources[preset.name] = path
        logger.info(f"Saved preset '{preset.name}' to {path}")
        return path

    def delete_preset(self, name: str) -> bool:
        """
        Remove a user preset and its file.

        Returns False for built-ins and unknown names. A file holding several
        presets is deleted as a whole.
        """
        if name not in self._user:
            return False

        path = self._sources.pop(name, None)
        if path is not None and path.exists():
            path.unlink()
            for other in [n for n, p in self._sources.items() if p == path]:
                del self._sources[other]
                del self._user[other]

        del self._user[name]
        logger.info(f"Deleted preset '{name}'")
        return True


# ============================================================================
# Module-level access
# ============================================================================

_manager: Optional[PresetManager] = None


def get_preset_manager() -> PresetManager:
    """Shared manager over ~/.sunflower/presets, created on first use"""
    global _manager
    if _manager is None:
        _manager = PresetManager()
    return _manager


def get_preset(name: str) -> Optional[ScenePreset]:
    return get_preset_manager().get(name)


def list_presets(tag: Optional[str] = None) -> List[str]:
    manager = get_preset_manager()
    return manager.list_by_tag(tag) if tag else manager.list_all()
