import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from .errors import ConfigError

DATA_DIR = Path(__file__).resolve().parent / "data"
DEFAULT_CONFIG_PATH = DATA_DIR / "helpdesk.json"

DEFAULT_MIN_DELAY_MS = 1000
DEFAULT_MAX_DELAY_MS = 2500
DEFAULT_QUESTION_PREFIX_LEN = 10

SECTIONS = ("knowledge_base", "scheduler", "server", "logging")


def section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    """Return a mapping section; an empty YAML section (``None``) reads as ``{}``."""
    value = config.get(name)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{name} must be a mapping, got {type(value).__name__}")
    return value


def read_config_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    if path.suffix.lower() in {".json"}:
        with path.open("r", encoding="utf-8") as f:
            config = json.load(f)
    elif path.suffix.lower() in {".yml", ".yaml"}:
        try:
            import yaml  # type: ignore
        except ImportError as exc:
            raise ImportError("YAML config requires PyYAML") from exc
        with path.open("r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
    else:
        raise ConfigError(f"Unsupported config format: {path.suffix}")

    if not isinstance(config, dict):
        raise ConfigError(f"Config root must be a mapping: {path}")

    for name in SECTIONS:
        if name in config:
            config[name] = section(config, name)

    # The KB path is relative to the file that names it.
    source = section(config, "knowledge_base").get("source")
    if source and not Path(source).is_absolute():
        config["knowledge_base"]["source"] = str((path.resolve().parent / source).resolve())
    return config


def merge_config(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay ``override`` on ``base`` one section deep; lists are replaced, not merged."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key].update(value)
        else:
            merged[key] = value
    return merged


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    config = read_config_file(DEFAULT_CONFIG_PATH)
    if path and Path(path).resolve() != DEFAULT_CONFIG_PATH:
        config = merge_config(config, read_config_file(Path(path)))
    validate_config(config)
    return config


def validate_config(config: Dict[str, Any]) -> None:
    for name in SECTIONS:
        section(config, name)

    # A bare string would be iterated character by character.
    pool = config.get("fallback_responses")
    if not isinstance(pool, list) or not pool or any(not isinstance(text, str) or not text.strip() for text in pool):
        raise ConfigError("fallback_responses must be a non-empty list of non-empty strings")

    rules = config.get("keyword_rules", [])
    if not isinstance(rules, list):
        raise ConfigError("keyword_rules must be a list")
    for idx, rule in enumerate(rules):
        keywords = rule.get("keywords") if isinstance(rule, dict) else None
        if not isinstance(keywords, list) or not keywords:
            raise ConfigError(f"keyword_rules[{idx}] needs a non-empty list of keywords")
        if any(not isinstance(k, str) or not k.strip() for k in keywords):
            raise ConfigError(f"keyword_rules[{idx}] has a blank keyword")
        if not rule.get("response"):
            raise ConfigError(f"keyword_rules[{idx}] has no response")

    delay_range(config)

    prefix_len = section(config, "knowledge_base").get("question_prefix_len", DEFAULT_QUESTION_PREFIX_LEN)
    if not isinstance(prefix_len, int) or prefix_len <= 0:
        raise ConfigError(f"knowledge_base.question_prefix_len must be a positive integer, got {prefix_len!r}")


def delay_range(config: Dict[str, Any]) -> Tuple[float, float]:
    sched_cfg = section(config, "scheduler")
    min_delay = sched_cfg.get("min_delay_ms", DEFAULT_MIN_DELAY_MS)
    max_delay = sched_cfg.get("max_delay_ms", DEFAULT_MAX_DELAY_MS)
    if min_delay < 0 or max_delay < min_delay:
        raise ConfigError(f"Invalid scheduler delay range: {min_delay}..{max_delay} ms")
    return min_delay, max_delay


def resolve_kb_source(config: Dict[str, Any]) -> Path:
    source = section(config, "knowledge_base").get("source")
    if not source:
        raise ConfigError("knowledge_base.source is not set")
    return Path(source)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
