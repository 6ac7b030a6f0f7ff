from .config import AppConfig, load_config
from .errors import VendorAPIError, vendor_error_from_response

__all__ = ["AppConfig", "load_config", "VendorAPIError", "vendor_error_from_response"]
