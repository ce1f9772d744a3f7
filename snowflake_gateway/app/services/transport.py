import base64
import binascii
from typing import Any, Protocol

from .errors import InvalidSnowflakeError, MalformedTransportStringError
from .snowflake import DeconstructedSnowflake, SnowflakeGenerator


class TextCodec(Protocol):
    def encode_text(self, text: str) -> str: ...

    def decode_text(self, text: str) -> str: ...


class Base64TextCodec:
    """Padded Base64 over the ASCII bytes of a string."""

    def __init__(self, urlsafe: bool = False) -> None:
        self._urlsafe = urlsafe

    def encode_text(self, text: str) -> str:
        raw = text.encode("ascii")
        encoded = base64.urlsafe_b64encode(raw) if self._urlsafe else base64.b64encode(raw)
        return encoded.decode("ascii")

    def decode_text(self, text: str) -> str:
        data = text.encode("ascii")
        if self._urlsafe:
            # urlsafe_b64decode has no strict mode; map back to the standard alphabet first.
            if b"+" in data or b"/" in data:
                raise binascii.Error("characters outside the URL-safe alphabet")
            data = data.replace(b"-", b"+").replace(b"_", b"/")
        decoded = base64.b64decode(data, validate=True).decode("ascii")
        # Nonzero padding bits decode too; only the canonical form is accepted.
        if self.encode_text(decoded) != text:
            raise binascii.Error(f"non-canonical encoding: {text!r}")
        return decoded


def build_codec(alphabet: str) -> Base64TextCodec:
    if alphabet == "urlsafe":
        return Base64TextCodec(urlsafe=True)
    if alphabet == "standard":
        return Base64TextCodec()
    raise ValueError(f"unknown transport alphabet: {alphabet!r}")


class TransportEncoder:
    def __init__(self, generator: SnowflakeGenerator, codec: TextCodec) -> None:
        self._generator = generator
        self._codec = codec

    def encode(self, snowflake: Any) -> str:
        if not snowflake or not isinstance(snowflake, str):
            raise InvalidSnowflakeError(
                f'"snowflake" must be a non-empty string (received {type(snowflake).__name__})', snowflake
            )
        self._generator.deconstruct(snowflake)
        return self._codec.encode_text(snowflake)

    def decode(self, encoded: Any) -> DeconstructedSnowflake:
        if not encoded or not isinstance(encoded, str):
            raise MalformedTransportStringError(
                f'"encoded" must be a non-empty string (received {type(encoded).__name__})', encoded
            )
        try:
            text = self._codec.decode_text(encoded)
        except (binascii.Error, UnicodeError, ValueError) as exc:
            raise MalformedTransportStringError(f"cannot decode transport string {encoded!r}: {exc}", encoded) from exc
        return self._generator.deconstruct(text)
