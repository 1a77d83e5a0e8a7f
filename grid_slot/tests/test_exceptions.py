import pytest
from grid_slot.exceptions import (
    AppException,
    ValidationException,
    InsufficientFundsException,
    ConfigurationException,
    GameLogicException
)
from grid_slot.error_codes import ErrorCodes

def test_app_exception_instantiation():
    exc = AppException(error_code="TEST_001", status_message="Test message", details={"field": "value"})

    assert exc.error_code == "TEST_001"
    assert exc.status_message == "Test message"
    assert exc.details == {"field": "value"}
    assert str(exc) == "Test message"

def test_app_exception_defaults():
    exc = AppException(error_code="TEST_002", status_message="Default test")
    assert exc.details == {}

def test_validation_exception():
    details = {"field": "Invalid format"}
    exc = ValidationException(status_message="Input is invalid", details=details)
    assert exc.error_code == ErrorCodes.VALIDATION_ERROR
    assert exc.status_message == "Input is invalid"
    assert exc.details == details
    with pytest.raises(AppException):
        raise exc

def test_validation_exception_custom_code():
    exc = ValidationException("Bet index 12 is out of range.", error_code=ErrorCodes.INVALID_BET)
    assert exc.error_code == ErrorCodes.INVALID_BET

def test_insufficient_funds_exception():
    exc = InsufficientFundsException(details={"balance": 500, "bet": 1000})
    assert exc.error_code == ErrorCodes.INSUFFICIENT_FUNDS
    assert exc.status_message == "Not enough balance. Add funds or lower bet."
    assert exc.details["bet"] == 1000

def test_configuration_exception():
    exc = ConfigurationException()
    assert exc.error_code == ErrorCodes.SLOT_CONFIG_ERROR
    assert exc.status_message == "Invalid game configuration"

def test_game_logic_exception():
    exc = GameLogicException("Bad grid", details={"row_lengths": [10, 9]})
    assert exc.error_code == ErrorCodes.GAME_LOGIC_ERROR
    assert str(exc) == "Bad grid"
