from .manager import append_data, set_key_values
from .errors import SheetAppendError, ConfigurationError, HeaderMismatchError
