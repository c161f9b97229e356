#!

"""Common things that don't depend on other ntcip modules.

"""

NTVERSION = "NTCIP-DMS/Python V1.0"

# Defaults

DEFCONFIG = "ntcip.conf"

# Dialog parameters.  The validate poll reads the message status up to
# VALIDATE_ATTEMPTS times, VALIDATE_INTERVAL seconds apart.
VALIDATE_ATTEMPTS = 10
VALIDATE_INTERVAL = 1
REQUESTER = "127.0.0.1"

# Exceptions
class NtcipException (Exception):
    """Base class for ntcip errors.

    The first argument, if any, is the message text; any further
    arguments are substituted into it with str.format.  Without
    arguments the class docstring is the message.  Keyword arguments
    become attributes of the exception.  If "step" is set, it names
    the dialog step that failed and is prefixed to the message.
    """
    step = None

    def __init__ (self, *args, **kwargs):
        super ().__init__ (*args)
        self.__dict__.update (kwargs)

    def __str__ (self):
        if self.args:
            text, *args = self.args
            text = str (text)
            if args:
                text = text.format (*args)
        else:
            text = self.__doc__
        if self.step:
            return "{} failed: {}".format (self.step, text)
        return text

class TransportError (NtcipException):
    """Request to the sign failed."""

# Responses that don't match what the dialog requires
class ProtocolError (NtcipException):
    """Unexpected response from the sign."""
class MissingResult (ProtocolError):
    """No available results."""
class WrongType (ProtocolError):
    """Value has the wrong type."""
class StatusMismatch (ProtocolError):
    """Message status has an unexpected value."""
class ErrorResponse (ProtocolError):
    """Sign answered with an error status."""

# Activation code encode/decode
class CodingError (NtcipException):
    """Activation code coding error."""
class EncodeError (CodingError):
    """Activation code encode error."""
class InvalidAddress (EncodeError):
    """Requester address is not a dotted decimal IPv4 address."""
class FieldOverflow (EncodeError):
    """Value too large for field size."""
class DecodeError (CodingError):
    """Activation code decode error."""
class MissingData (DecodeError):
    """Unexpected end of data in decode."""
class ExtraData (DecodeError):
    """Unexpected data at end of buffer."""

# Conditions reported by the sign itself
class DeviceCondition (NtcipException):
    """Sign reported a condition that prevents the operation."""
class ActivationBlocked (DeviceCondition):
    """Message activated but the sign reports errors preventing display."""

# The standard defines error detail dialogs for these; they are not
# carried out, which these exceptions make visible.
class DiagnosisNotPerformed (NtcipException):
    """Error diagnosis not yet performed."""
class ValidateFailed (DiagnosisNotPerformed, DeviceCondition):
    """Message did not become valid; validate error diagnosis not performed."""
class ActivateFailed (DiagnosisNotPerformed):
    """Activation refused; activate error diagnosis not performed."""

class PollTimeout (NtcipException):
    """Poll attempt budget exhausted."""
