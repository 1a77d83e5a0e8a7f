class ErrorCodes:
    VALIDATION_ERROR = "GS_001"
    INVALID_BET = "GS_002"
    INVALID_AMOUNT = "GS_003"
    INSUFFICIENT_FUNDS = "GS_004"
    SLOT_CONFIG_ERROR = "GS_005"
    GAME_LOGIC_ERROR = "GS_006"
