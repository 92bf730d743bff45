from typing import Optional, Union

from . import utils
from .otp import OTP
from .parameters import DEFAULT_ALGORITHM, DEFAULT_DIGITS, Algorithm, OtpParameters


class HOTP(OTP):
    """
    Handler for HMAC-based OTP counters.

    Only generates and checks codes; provisioning URIs are written for TOTP
    secrets alone.
    """

    def __init__(
        self,
        s: Union[str, OtpParameters],
        digits: int = DEFAULT_DIGITS,
        digest: Union[Algorithm, str] = DEFAULT_ALGORITHM,
        name: Optional[str] = None,
        issuer: Optional[str] = None,
        initial_count: int = 0,
    ) -> None:
        """
        :param s: base32 secret, or parsed parameters (period is unused)
        :param digits: length of each code
        :param digest: hash algorithm used in the HMAC
        :param name: account name
        :param issuer: issuer
        :param initial_count: added to every counter passed to :meth:`at`
        """
        self.initial_count = initial_count
        super().__init__(s=s, digits=digits, digest=digest, name=name, issuer=issuer)

    def at(self, count: int) -> str:
        """
        Code for counter ``initial_count + count``.
        """
        return self.generate_otp(self.initial_count + count)

    def verify(self, otp: str, counter: int) -> bool:
        """
        Checks ``otp`` against the code for ``counter`` in constant time.
        """
        return utils.strings_equal(str(otp), self.at(counter))
