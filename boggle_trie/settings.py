import os
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class Settings:
    BASE_DIR: Path = field(default_factory=lambda: Path(__file__).resolve().parent.parent)

    DICTIONARY_PATH: Path = field(init=False)

    GRID_SIZE: int = 4
    MIN_WORD_LENGTH: int = 3
    MAX_WORD_LENGTH: int = 0  # 0 means GRID_SIZE squared
    MAX_RESULTS: int = 50  # 0 means no limit

    NOTIFY: bool = False
    NTFY_TOPIC: str = "boggle-trie"
    NTFY_URL: str = "https://ntfy.sh"
    NOTIFY_WORDS_PER_GROUP: int = 10

    BATCH_WORKERS: int = 1
    DEBUG: bool = False  # boggle_trie logger at DEBUG instead of INFO

    def __post_init__(self):
        self.DICTIONARY_PATH = self.BASE_DIR / "dictionary.txt"

        # Override from environment
        for fld in self.__dataclass_fields__:
            env_val = os.environ.get(fld)
            if env_val is not None:
                current = getattr(self, fld)
                if isinstance(current, bool):
                    setattr(self, fld, _parse_bool(env_val))
                elif isinstance(current, int):
                    setattr(self, fld, int(env_val))
                elif isinstance(current, float):
                    setattr(self, fld, float(env_val))
                elif isinstance(current, Path):
                    setattr(self, fld, Path(env_val))
                else:
                    setattr(self, fld, env_val)

    def max_word_length(self, grid_size: int | None = None) -> int:
        size = self.GRID_SIZE if grid_size is None else grid_size
        return self.MAX_WORD_LENGTH or size * size


# Fields that may be changed at runtime through the settings API
EDITABLE_FIELDS: dict[str, type] = {
    "MAX_RESULTS": int,
    "MAX_WORD_LENGTH": int,
    "NOTIFY": bool,
    "NOTIFY_WORDS_PER_GROUP": int,
    "NTFY_TOPIC": str,
    "BATCH_WORKERS": int,
    "DEBUG": bool,
}


def _parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("1", "true", "yes"):
        return True
    if text in ("0", "false", "no", ""):
        return False
    raise ValueError(f"not a boolean: {value!r}")


def get_editable_settings(cfg: Settings) -> dict:
    return {name: getattr(cfg, name) for name in EDITABLE_FIELDS}


def update_settings(cfg: Settings, **values) -> dict[str, str]:
    """Apply ``values`` to ``cfg``; returns per-field error messages.

    Valid fields are applied even when other fields in the same call fail.
    """
    errors: dict[str, str] = {}
    for name, raw in values.items():
        typ = EDITABLE_FIELDS.get(name)
        if typ is None:
            errors[name] = "unknown field" if not hasattr(cfg, name) else "field is not editable"
            continue
        try:
            if typ is bool:
                value = _parse_bool(raw)
            elif typ is int:
                if isinstance(raw, bool):
                    raise ValueError("expected an integer")
                value = int(raw)
                if value < 0:
                    raise ValueError("must not be negative")
            else:
                value = typ(raw)
        except (TypeError, ValueError) as e:
            errors[name] = str(e)
            continue
        setattr(cfg, name, value)
    return errors


settings = Settings()
