from .response_wrappers import AppSettingsResponse, ErrorResponse, MessageResponse

__all__ = ["AppSettingsResponse", "ErrorResponse", "MessageResponse"]
