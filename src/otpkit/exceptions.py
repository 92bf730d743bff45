class OTPError(ValueError):
    """
    Base class for every error raised while turning a secret into a code.
    """


class InvalidEncoding(OTPError):
    """The secret is not valid base32."""


class MalformedURI(OTPError):
    """An otpauth URI is missing a required field or has an unparsable one."""


class UnsupportedAlgorithm(OTPError):
    """The hash algorithm is not one of sha1, sha256 or sha512."""


class InvalidParameter(OTPError):
    """Digits, period, secret or counter is outside the accepted range."""
