"""Risk report configuration files.

This is the only module that touches the filesystem. The statistics and risk
routines under ``tail_risk.backend`` take arrays and settings objects and
never import it.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, Mapping

import yaml
from pydantic import ValidationError

from .data_models import RiskConfig
from .errors import FinancialModelError

logger = logging.getLogger(__name__)

_DECODERS: dict[str, Callable[[str], Any]] = {
    ".json": json.loads,
    ".yaml": yaml.safe_load,
    ".yml": yaml.safe_load,
}


def load_risk_config(path: str | Path) -> RiskConfig:
    """Read a ``.json``, ``.yaml`` or ``.yml`` file into a ``RiskConfig``.

    An empty YAML document yields the defaults.

    Raises:
        FileNotFoundError: ``path`` does not exist.
        FinancialModelError: Unknown suffix, undecodable text, a document
            that is not a mapping, or values ``RiskConfig`` rejects.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"config file not found: {path}")

    decode = _DECODERS.get(path.suffix.lower())
    if decode is None:
        raise FinancialModelError(
            f"unsupported config format: {path.suffix or '<none>'}, expected one of {sorted(_DECODERS)}",
            code="invalid_config",
        )
    try:
        raw = decode(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise FinancialModelError(f"cannot decode {path.name}: {exc}", code="invalid_config") from exc

    logger.debug("loaded risk config from %s", path)
    return parse_risk_config({} if raw is None else raw)


def parse_risk_config(raw: Mapping[str, Any]) -> RiskConfig:
    """Validate an already decoded configuration mapping."""
    if not isinstance(raw, Mapping):
        raise FinancialModelError(
            f"risk configuration must be a mapping, got {type(raw).__name__}", code="invalid_config"
        )
    try:
        return RiskConfig.model_validate(raw)
    except ValidationError as exc:
        raise FinancialModelError(f"invalid risk configuration: {exc}", code="invalid_config") from exc
