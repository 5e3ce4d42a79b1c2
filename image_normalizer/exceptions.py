class NormalizationError(Exception):
    error_code = "NORMALIZATION_ERROR"


class DecodeError(NormalizationError):
    """Input bytes, text or file could not be turned into pixels."""
    error_code = "DECODE_ERROR"


class InvalidInput(NormalizationError):
    """Request is malformed: no source, several sources, bad sizes."""
    error_code = "INVALID_INPUT"


class InvalidRegion(NormalizationError):
    """No foreground was found, or the region to crop is degenerate."""
    error_code = "INVALID_REGION"


class EncodeError(NormalizationError):
    error_code = "ENCODE_ERROR"
