import datetime
import math
import time
from typing import Optional, Union

from . import utils
from .exceptions import InvalidParameter
from .otp import OTP, hotp
from .parameters import DEFAULT_ALGORITHM, DEFAULT_DIGITS, DEFAULT_PERIOD, Algorithm, OtpParameters

Instant = Union[datetime.datetime, int, float]


def unix_seconds(for_time: Instant) -> float:
    """
    Seconds since the epoch for ``for_time``. Aware datetimes are converted
    to UTC, naive ones are taken as local time.
    """
    if isinstance(for_time, datetime.datetime):
        return for_time.timestamp()
    return for_time


def timecode(for_time: Instant, period: int) -> int:
    seconds = unix_seconds(for_time)
    if isinstance(seconds, float) and not math.isfinite(seconds):
        raise InvalidParameter("time must be a finite number of seconds, got {}".format(seconds))
    return int(seconds // period)


def generate(params: OtpParameters, now: Instant) -> str:
    """
    Implements RFC 6238: the HOTP code for the period containing ``now``.

    :param params: validated generation parameters
    :param now: the instant to generate for, as a datetime or Unix seconds
    :returns: OTP
    """
    return hotp(params.secret, timecode(now, params.period), params.digits, params.algorithm)


class TOTP(OTP):
    """
    Handler for time-based OTP counters.
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
        :param s: secret in base32 format, or parsed parameters
        :param interval: the time interval in seconds for OTP. This defaults to 30.
        :param digits: number of integers in the OTP. Some apps expect this to be 6 digits, others support more.
        :param digest: digest function to use in the HMAC (expected to be SHA1)
        :param name: account name
        :param issuer: issuer
        """
        super().__init__(s=s, digits=digits, digest=digest, name=name, issuer=issuer, interval=interval)

    @property
    def interval(self) -> int:
        return self.params.period

    def at(self, for_time: Instant, counter_offset: int = 0) -> str:
        """
        Accepts either a Unix timestamp integer or a datetime object.

        :param for_time: the time to generate an OTP for
        :param counter_offset: the amount of ticks to add to the time counter
        :returns: OTP value
        """
        return self.generate_otp(self.timecode(for_time) + counter_offset)

    def now(self) -> str:
        """
        Generate the current time OTP

        :returns: OTP value
        """
        return generate(self.params, time.time())

    def verify(self, otp: str, for_time: Optional[Instant] = None, valid_window: int = 0) -> bool:
        """
        Verifies the OTP passed in against the current time OTP.

        :param otp: the OTP to check against
        :param for_time: Time to check OTP at (defaults to now)
        :param valid_window: extends the validity to this many counter ticks before and after the current one
        :returns: True if verification succeeded, False otherwise
        """
        if for_time is None:
            for_time = time.time()

        counter = self.timecode(for_time)
        for candidate in range(counter - valid_window, counter + valid_window + 1):
            if candidate < 0:
                continue
            if utils.strings_equal(str(otp), self.generate_otp(candidate)):
                return True
        return False

    def provisioning_uri(self, name: Optional[str] = None, issuer_name: Optional[str] = None) -> str:
        """
        Returns the provisioning URI for the OTP.  This can then be
        encoded in a QR Code and used to provision an OTP app like
        Google Authenticator.

        See also:
            https://github.com/google/google-authenticator/wiki/Key-Uri-Format

        """
        return utils.build_uri(
            self.secret,
            name if name else self.name,
            issuer=issuer_name if issuer_name else self.issuer,
            algorithm=self.digest.value,
            digits=self.digits,
            period=self.interval,
        )

    def timecode(self, for_time: Instant) -> int:
        """
        Accepts either a timezone naive (`for_time.tzinfo is None`) or
        a timezone aware datetime as argument and returns the
        corresponding counter value (timecode).

        """
        return timecode(for_time, self.interval)
