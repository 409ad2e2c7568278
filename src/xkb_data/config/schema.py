"""Configuration schema validation."""

from typing import Dict, Any, Literal, Optional
import logging

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .paths import X11_BASE_RULES, X11_EXTRAS_RULES

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ["text", "json", "yaml", "table"]
RULE_SET_CHOICES = ["all", "base", "extras"]


class XkbDataConfig(BaseModel):
    """Settings for locating and printing XKB rules."""

    model_config = ConfigDict(extra="forbid")

    base_rules_xml: Optional[str] = Field(
        default=None,
        description="Base rules registry used instead of the system file; X11_BASE_RULES_XML still wins"
    )
    extra_rules_xml: Optional[str] = Field(
        default=None,
        description="Extra rules registry used instead of the system file; X11_EXTRA_RULES_XML still wins"
    )
    rule_set: Literal["all", "base", "extras"] = Field(
        default="all",
        description="Which rule sets to load: base, extras, or all (base followed by extras)"
    )
    output_format: Literal["text", "json", "yaml", "table"] = Field(
        default="text",
        description="Output format for printed layouts"
    )


def validate_config(config: Dict[str, Any]) -> XkbDataConfig:
    """Validate configuration dictionary against expected schema.

    Args:
        config: Configuration dictionary to validate

    Returns:
        Validated configuration

    Raises:
        ValueError: If configuration is invalid
    """
    try:
        validated = XkbDataConfig(**config)
    except ValidationError as e:
        errors = []
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"]) or "<root>"
            errors.append(f"{location}: {error['msg']}")
        error_msg = "Configuration validation failed:\n" + "\n".join(errors)
        logger.error(error_msg)
        raise ValueError(error_msg) from e

    logger.debug("Configuration validation passed")
    return validated


def get_config_template() -> Dict[str, Any]:
    """Get a starter configuration with every setting at its default.

    Returns:
        Configuration template dictionary
    """
    return {
        "base_rules_xml": X11_BASE_RULES,
        "extra_rules_xml": X11_EXTRAS_RULES,
        "rule_set": "all",
        "output_format": "text",
    }
