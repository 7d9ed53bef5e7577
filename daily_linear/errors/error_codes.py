"""
Central registry of error codes for daily-linear.

Error codes follow the pattern: CATEGORY-ErrorName

Categories:
- CONFIG: Configuration loading and validation errors
- SHAPE: Tensor shape and rank mismatches
- MODEL: Model construction, persistence and inference errors

Usage:
    from daily_linear.errors.error_codes import ErrorCodes

    raise ShapeMismatchError(
        message="Input has 10 features, model expects 23",
        error_code=ErrorCodes.SHAPE_INPUT_WIDTH,
        ...
    )
"""


class ErrorCodes:
    """Central registry of error codes for consistent error handling."""

    # Configuration errors
    CONFIG_FILE_NOT_FOUND = "CONFIG-FileNotFound"
    CONFIG_INVALID_YAML = "CONFIG-InvalidYaml"
    CONFIG_VALIDATION_FAILED = "CONFIG-ValidationFailed"
    CONFIG_INVALID_DROPOUT = "CONFIG-InvalidDropout"
    CONFIG_INVALID_WIDTHS = "CONFIG-InvalidWidths"
    CONFIG_OUTPUT_SIZE_MISMATCH = "CONFIG-OutputSizeMismatch"
    CONFIG_UNKNOWN_PRESET = "CONFIG-UnknownPreset"
    CONFIG_BACKEND_NOT_TRAINABLE = "CONFIG-BackendNotTrainable"

    # Shape errors
    SHAPE_INPUT_RANK = "SHAPE-InputRank"
    SHAPE_INPUT_WIDTH = "SHAPE-InputWidth"
    SHAPE_TARGET_RANK = "SHAPE-TargetRank"
    SHAPE_TARGET_LENGTH = "SHAPE-TargetLength"
    SHAPE_TARGET_VALUES = "SHAPE-TargetValues"
    SHAPE_PARAMETER = "SHAPE-Parameter"

    # Model errors
    MODEL_STATE_MISMATCH = "MODEL-StateMismatch"
    MODEL_LOAD_FAILED = "MODEL-LoadFailed"
    MODEL_MATERIALIZATION_FAILED = "MODEL-MaterializationFailed"
