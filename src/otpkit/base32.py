import base64
import binascii
import string

from .exceptions import InvalidEncoding

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"

_WHITESPACE = str.maketrans("", "", string.whitespace)

# Unpadded lengths (mod 8) whose last group holds a whole number of bytes.
_VALID_REMAINDERS = (0, 2, 4, 5, 7)


def decode(secret: str) -> bytes:
    """
    Decodes an RFC 4648 base32 string into raw bytes.

    Whitespace is dropped, lowercase letters are accepted and trailing
    ``=`` padding is optional.

    :param secret: the base32 text, e.g. ``"JBSW Y3DP EHPK 3PXP"``
    :returns: decoded bytes
    :raises InvalidEncoding: on a character outside the alphabet, or a
        final group too short to form a byte
    """
    s = secret.translate(_WHITESPACE).upper().rstrip("=")

    for position, char in enumerate(s):
        if char not in ALPHABET:
            raise InvalidEncoding("Invalid base32 character {!r} at position {}".format(char, position))

    if len(s) % 8 not in _VALID_REMAINDERS:
        raise InvalidEncoding("Invalid base32 length {}: trailing bits do not form a byte".format(len(s)))

    try:
        return base64.b32decode(s + "=" * (-len(s) % 8))
    except binascii.Error as e:
        raise InvalidEncoding(str(e)) from e


def encode(data: bytes) -> str:
    """
    Encodes bytes as base32 without padding, the form otpauth URIs use.
    """
    return base64.b32encode(data).decode("ascii").rstrip("=")
