import hmac
from typing import Optional, Union

from . import base32
from .exceptions import InvalidParameter
from .parameters import DEFAULT_ALGORITHM, DEFAULT_DIGITS, DEFAULT_PERIOD, Algorithm, OtpParameters

MAX_COUNTER = 2**64 - 1


def int_to_bytestring(i: int, padding: int = 8) -> bytes:
    """
    Turns a counter into the big-endian bytestring fed to the HMAC.
    """
    if i < 0 or i > MAX_COUNTER:
        raise InvalidParameter("counter must fit in an unsigned 64-bit integer, got {}".format(i))
    return i.to_bytes(padding, "big")


def hotp(secret: bytes, counter: int, digits: int = DEFAULT_DIGITS, algorithm: Algorithm = DEFAULT_ALGORITHM) -> str:
    """
    Implements RFC 4226: HMAC over the counter, dynamic truncation and
    reduction to ``digits`` decimal digits.

    Parameters are expected to have passed :func:`otpkit.parameters.validate`.

    :param secret: raw key bytes
    :param counter: the moving factor, ``0 <= counter < 2**64``
    :param digits: length of the code
    :param algorithm: hash used in the HMAC
    :returns: the code, left-padded with zeros to ``digits`` characters
    """
    hmac_hash = hmac.new(secret, int_to_bytestring(counter), algorithm.digest).digest()
    offset = hmac_hash[-1] & 0x0F
    code = int.from_bytes(hmac_hash[offset : offset + 4], "big") & 0x7FFFFFFF
    return str(code % 10**digits).zfill(digits)


class OTP(object):
    """
    Base class for OTP handlers.
    """

    def __init__(
        self,
        s: Union[str, OtpParameters],
        digits: int = DEFAULT_DIGITS,
        digest: Union[Algorithm, str] = DEFAULT_ALGORITHM,
        name: Optional[str] = None,
        issuer: Optional[str] = None,
        interval: int = DEFAULT_PERIOD,
    ) -> None:
        """
        :param s: secret in base32 format, or already parsed parameters
            (in which case the other arguments are ignored)
        :param digits: number of integers in the OTP
        :param digest: hash algorithm used in the HMAC
        :param name: account name
        :param issuer: issuer
        :param interval: period in seconds, only meaningful for TOTP
        """
        if isinstance(s, OtpParameters):
            self.params = s
        else:
            self.params = OtpParameters(
                secret=base32.decode(s),
                digits=digits,
                period=interval,
                algorithm=digest,
                name=name,
                issuer=issuer,
            )

    @property
    def secret(self) -> str:
        return base32.encode(self.params.secret)

    @property
    def digits(self) -> int:
        return self.params.digits

    @property
    def digest(self) -> Algorithm:
        return self.params.algorithm

    @property
    def name(self) -> str:
        return self.params.name or "Secret"

    @property
    def issuer(self) -> Optional[str]:
        return self.params.issuer

    def byte_secret(self) -> bytes:
        return self.params.secret

    def generate_otp(self, input: int) -> str:
        """
        :param input: the HMAC counter value to use as the OTP input.
            Usually either the counter, or the computed integer based on the Unix timestamp
        """
        return hotp(self.byte_secret(), input, self.digits, self.digest)
