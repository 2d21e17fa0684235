from src.error_handler import ErrorHandler
from src.integrations.errors import AuthError, SimulatedPaymentFailure, ValidationError


def test_handle_exception_returns_payload():
    eh = ErrorHandler()
    out = eh.handle_exception(Exception("boom"), context={"k": "v"})
    assert set(out) == {"error"}
    assert "internal error" in out["error"].lower()
    assert "boom" not in out["error"]


def test_handle_payment_error_keeps_message_and_payload():
    eh = ErrorHandler()
    assert eh.handle_payment_error(ValidationError("Invalid MTN phone number format")) == {
        "error": "Invalid MTN phone number format"
    }
    out = eh.handle_payment_error(SimulatedPaymentFailure("[DEV MODE] Payment failed.", payload={"developmentMode": True}))
    assert out == {"error": "[DEV MODE] Payment failed.", "developmentMode": True}


def test_error_status_codes():
    assert ValidationError("x").status_code == 400
    assert SimulatedPaymentFailure("x").status_code == 400
    assert AuthError("x").status_code == 500
