"""dateformat - token based date formatting and relative-time phrases.

Format instants with compact single-character tokens ("Y-m-d H:i:s"),
escape literal text with braces ("{Week} W"), and describe distances from
now either as a years/months/days breakdown or as a short phrase such as
"5 minutes ago".
"""

from dateformat.api import (
    format_date,
    get_default_engine,
    get_token_value,
    has_token,
    register_token,
    register_tokens,
    relative_short,
    relative_verbose,
    tokens,
    update_short_labels,
    update_verbose_labels,
)
from dateformat.core.config import (
    ConfigurationError,
    MainConfig,
    NameTables,
    ShortLabels,
    VerboseLabels,
    load_main_config,
)
from dateformat.core.engine import DateFormatter
from dateformat.core.tokens import TokenRegistrationError, TokenTable, UnknownTokenError
from dateformat.types.instant import Instant, InvalidInstantError
from dateformat.utils.formatting import pad, rpad
from dateformat.utils.template import TemplateError

__all__ = [
    # Engine
    "DateFormatter",
    "Instant",
    "TokenTable",
    # Module-level API
    "format_date",
    "get_default_engine",
    "get_token_value",
    "has_token",
    "pad",
    "register_token",
    "register_tokens",
    "relative_short",
    "relative_verbose",
    "rpad",
    "tokens",
    "update_short_labels",
    "update_verbose_labels",
    # Configuration
    "MainConfig",
    "NameTables",
    "ShortLabels",
    "VerboseLabels",
    "load_main_config",
    # Errors
    "ConfigurationError",
    "InvalidInstantError",
    "TemplateError",
    "TokenRegistrationError",
    "UnknownTokenError",
]
