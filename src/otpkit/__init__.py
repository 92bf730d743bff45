import re
import secrets
from typing import Dict, Optional, Sequence
from urllib.parse import parse_qsl, unquote, urlparse

from . import base32
from .exceptions import InvalidEncoding as InvalidEncoding
from .exceptions import InvalidParameter as InvalidParameter
from .exceptions import MalformedURI as MalformedURI
from .exceptions import OTPError as OTPError
from .exceptions import UnsupportedAlgorithm as UnsupportedAlgorithm
from .hotp import HOTP as HOTP
from .otp import OTP as OTP
from .parameters import Algorithm as Algorithm
from .parameters import OtpParameters as OtpParameters
from .totp import TOTP as TOTP
from .totp import Instant, generate

_UNSIGNED = re.compile(r"[0-9]+")


def random_base32(length: int = 32, chars: Sequence[str] = base32.ALPHABET) -> str:
    # Note: the otpauth scheme DOES NOT use base32 padding for secret lengths not divisible by 8.
    if length < 32:
        raise ValueError("Secrets should be at least 160 bits")

    return "".join(secrets.choice(chars) for _ in range(length))


def _parse_unsigned(key: str, value: str) -> int:
    if not _UNSIGNED.fullmatch(value):
        raise MalformedURI("Invalid value for {}: {!r} is not an unsigned integer".format(key, value))
    return int(value)


def _is_totp_uri(key: str) -> bool:
    try:
        parsed_uri = urlparse(key)
    except ValueError:
        return False
    return parsed_uri.scheme == "otpauth" and parsed_uri.netloc == "totp"


# otpauth://totp/FooCorp:alice@example.com?secret=JBSWY3DPEHPK3PXP&issuer=FooCorp&algorithm=sha256&digits=8&period=60
#           type  label (issuer:account)   query parameters


def parse_uri(uri: str) -> OtpParameters:
    """
    Parses a TOTP provisioning URI.

    Only ``secret``, ``algorithm``, ``digits`` and ``period`` affect
    generation; the label and ``issuer`` are kept for display and any other
    parameter is ignored. A parameter given twice takes its first value.

    See also:
        https://github.com/google/google-authenticator/wiki/Key-Uri-Format

    :param uri: the ``otpauth://totp/...`` URI to parse
    :returns: validated parameters
    :raises MalformedURI: when the URI is not an otpauth TOTP URI, has no
        secret, or has a non-numeric digits or period
    :raises UnsupportedAlgorithm: for an algorithm other than sha1, sha256 or sha512
    :raises InvalidEncoding: when the secret is not base32
    :raises InvalidParameter: when digits or period are out of range
    """
    try:
        parsed_uri = urlparse(uri)
    except ValueError as e:
        raise MalformedURI("Unparsable URI: {}".format(e)) from e

    if parsed_uri.scheme != "otpauth":
        raise MalformedURI("Not an otpauth URI")
    if parsed_uri.netloc != "totp":
        raise MalformedURI("Not a supported OTP type: {!r}, only totp is supported".format(parsed_uri.netloc))

    name: Optional[str] = None
    issuer: Optional[str] = None
    label = unquote(parsed_uri.path[1:])
    if label:
        accountinfo_parts = label.split(":", 1)
        if len(accountinfo_parts) == 1:
            name = accountinfo_parts[0]
        else:
            issuer, name = accountinfo_parts

    query: Dict[str, str] = {}
    for key, value in parse_qsl(parsed_uri.query, keep_blank_values=True):
        query.setdefault(key, value)

    secret = query.get("secret")
    if not secret or not secret.strip():
        raise MalformedURI("No secret found in URI")

    digits = _parse_unsigned("digits", query["digits"]) if "digits" in query else None
    period = _parse_unsigned("period", query["period"]) if "period" in query else None
    algorithm = Algorithm.from_token(query["algorithm"]) if "algorithm" in query else None

    fields = {
        "digits": digits,
        "period": period,
        "algorithm": algorithm,
        "name": name,
        "issuer": query.get("issuer", issuer),
    }
    return OtpParameters(
        secret=base32.decode(secret),
        **{k: v for k, v in fields.items() if v is not None},
    )


def parse_secret(key: str) -> OtpParameters:
    """
    Turns a stored secret into generation parameters.

    ``key`` may be an ``otpauth://totp/`` URI or a bare base32 secret.
    Anything that is not an otpauth TOTP URI, including other URIs, is
    decoded as a bare secret with the default parameters (6 digits, 30
    seconds, sha1).

    :raises OTPError: see :func:`parse_uri` and :func:`otpkit.base32.decode`
    """
    if _is_totp_uri(key):
        return parse_uri(key)
    return OtpParameters(secret=base32.decode(key))


def generate_code(key: str, now: Instant) -> str:
    """
    Generates the TOTP code for a stored secret at ``now``.

    :param key: an otpauth TOTP URI or a bare base32 secret
    :param now: a datetime or Unix seconds
    :returns: the code as a zero-padded decimal string
    """
    return generate(parse_secret(key), now)
