import enum
import hashlib
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from .exceptions import InvalidParameter, UnsupportedAlgorithm

DEFAULT_DIGITS = 6
DEFAULT_PERIOD = 30
MIN_DIGITS = 1
MAX_DIGITS = 10


class Algorithm(enum.Enum):
    """
    Hash functions usable in the HMAC. Values are the otpauth URI tokens.
    """

    SHA1 = "sha1"
    SHA256 = "sha256"
    SHA512 = "sha512"

    @property
    def digest(self) -> Callable[..., Any]:
        if self is Algorithm.SHA1:
            return hashlib.sha1
        elif self is Algorithm.SHA256:
            return hashlib.sha256
        return hashlib.sha512

    @classmethod
    def from_token(cls, token: str) -> "Algorithm":
        """
        Looks up an algorithm by its lowercase token. Matching is exact:
        ``"SHA1"`` is rejected.
        """
        try:
            return cls(token)
        except ValueError:
            raise UnsupportedAlgorithm(
                "Invalid value for algorithm {!r}, must be sha1, sha256 or sha512".format(token)
            ) from None


DEFAULT_ALGORITHM = Algorithm.SHA1


def validate(
    secret: bytes,
    digits: int = DEFAULT_DIGITS,
    period: int = DEFAULT_PERIOD,
    algorithm: Union[Algorithm, str] = DEFAULT_ALGORITHM,
) -> Algorithm:
    """
    Checks generation parameters before any HMAC is computed.

    :returns: the algorithm, coerced to :class:`Algorithm`
    :raises InvalidParameter: for an empty secret or out of range digits/period
    :raises UnsupportedAlgorithm: for an unknown algorithm
    """
    if not isinstance(secret, bytes) or not secret:
        raise InvalidParameter("secret must be a non-empty byte string")
    # bool is an int subclass but never a digit count
    if isinstance(digits, bool) or not isinstance(digits, int):
        raise InvalidParameter("digits must be an integer")
    if not MIN_DIGITS <= digits <= MAX_DIGITS:
        raise InvalidParameter("digits must be between {} and {}, got {}".format(MIN_DIGITS, MAX_DIGITS, digits))
    if isinstance(period, bool) or not isinstance(period, int):
        raise InvalidParameter("period must be an integer")
    if period <= 0:
        raise InvalidParameter("period must be a positive number of seconds, got {}".format(period))
    if isinstance(algorithm, Algorithm):
        return algorithm
    if isinstance(algorithm, str):
        return Algorithm.from_token(algorithm)
    raise UnsupportedAlgorithm("algorithm must be sha1, sha256 or sha512, got {!r}".format(algorithm))


@dataclass(frozen=True)
class OtpParameters:
    """
    Everything needed to generate a TOTP code.

    ``name`` and ``issuer`` come from a provisioning URI label and are only
    kept for display; they play no part in generation.
    """

    secret: bytes
    digits: int = DEFAULT_DIGITS
    period: int = DEFAULT_PERIOD
    algorithm: Algorithm = DEFAULT_ALGORITHM
    name: Optional[str] = None
    issuer: Optional[str] = None

    def __post_init__(self) -> None:
        algorithm = validate(self.secret, self.digits, self.period, self.algorithm)
        object.__setattr__(self, "algorithm", algorithm)

    def __repr__(self) -> str:
        # keep the secret out of tracebacks and logs
        return "OtpParameters(digits={}, period={}, algorithm={}, name={!r}, issuer={!r})".format(
            self.digits, self.period, self.algorithm.value, self.name, self.issuer
        )
