import unicodedata
from hmac import compare_digest
from typing import Dict, Optional, Union
from urllib.parse import quote, urlencode

from .parameters import DEFAULT_ALGORITHM, DEFAULT_DIGITS, DEFAULT_PERIOD


def build_uri(
    secret: str,
    name: str,
    issuer: Optional[str] = None,
    algorithm: Optional[str] = None,
    digits: Optional[int] = None,
    period: Optional[int] = None,
) -> str:
    """
    Returns the ``otpauth://totp/`` provisioning URI for a TOTP secret, in
    the form :func:`otpkit.parse_uri` reads back.

    For module-internal use.

    See also:
        https://github.com/google/google-authenticator/wiki/Key-Uri-Format

    :param secret: the base32 secret
    :param name: name of the account
    :param issuer: the name of the OTP issuer; this will be the
        organization title of the OTP entry in Authenticator
    :param algorithm: lowercase algorithm token, e.g. ``"sha256"``
    :param digits: the length of the OTP generated code.
    :param period: the number of seconds the OTP generator is set to
        expire every code.
    :returns: provisioning uri
    """
    url_args: Dict[str, Union[int, str]] = {"secret": secret}

    label = quote(name)
    if issuer is not None:
        label = quote(issuer) + ":" + label
        url_args["issuer"] = issuer

    # only non-default values are written
    if algorithm is not None and algorithm != DEFAULT_ALGORITHM.value:
        url_args["algorithm"] = algorithm
    if digits is not None and digits != DEFAULT_DIGITS:
        url_args["digits"] = digits
    if period is not None and period != DEFAULT_PERIOD:
        url_args["period"] = period

    return "otpauth://totp/{}?{}".format(label, urlencode(url_args).replace("+", "%20"))


def strings_equal(s1: str, s2: str) -> bool:
    """
    Timing-attack resistant string comparison.

    Both strings are NFKC-normalized first, so fullwidth digits compare
    equal to their ASCII forms. Only the length can leak through timing.
    """
    s1 = unicodedata.normalize("NFKC", s1)
    s2 = unicodedata.normalize("NFKC", s2)
    return compare_digest(s1.encode("utf-8"), s2.encode("utf-8"))
