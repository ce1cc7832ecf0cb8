"""Constants for jcal parsing library."""

# Related to rfc5545 text parsing
FOLD = r"\r?\n[ \t]"
WSP = [" ", "\t"]
VALUE_DELIMITER = ":"
PARAM_DELIMITER = ";"
PARAM_NAME_DELIMITER = "="
QUOTE = '"'
ESCAPE = "\\"

ATTR_END = "END"
ATTR_BEGIN_LOWER = "begin"
ATTR_END_LOWER = "end"
ATTR_VALUE_LOWER = "value"

DEFAULT_VALUE_TYPE = "unknown"
DEFAULT_PARAM_TYPE = "text"
