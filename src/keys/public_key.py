"""SSH public key value type."""

from dataclasses import dataclass

from .exceptions import ParsePublicKeyError


@dataclass(frozen=True, eq=False)
class PublicKey:
    """One ``authorized_keys`` line: ``<algorithm> <data> [comment]``.

    Two keys are equal when their algorithm and data fields match; the
    comment is ignored for equality and hashing but kept in ``line`` so the
    key is written back exactly as it was read.
    """

    line: str

    def __post_init__(self) -> None:
        if not isinstance(self.line, str):
            raise ParsePublicKeyError(f"public key must be a string, got {type(self.line).__name__}")
        line = self.line.strip()
        if len(line.splitlines()) > 1:
            raise ParsePublicKeyError(f"public key must be a single line: {self.line!r}")
        if len(line.split(maxsplit=2)) < 2:
            raise ParsePublicKeyError(f"failed to parse public key: {self.line!r}")
        object.__setattr__(self, "line", line)

    @classmethod
    def parse(cls, line: str) -> "PublicKey":
        return cls(line)

    @property
    def algorithm(self) -> str:
        return self.line.split(maxsplit=1)[0]

    @property
    def data(self) -> str:
        return self.line.split(maxsplit=2)[1]

    def comment(self) -> str | None:
        """Return the text after the key data, if any."""
        fields = self.line.split(maxsplit=2)
        if len(fields) != 3:
            return None
        return fields[2]

    def strip_comment(self) -> "PublicKey":
        return PublicKey(f"{self.algorithm} {self.data}")

    def _key_fields(self) -> tuple[str, str]:
        fields = self.line.split(maxsplit=2)
        return fields[0], fields[1]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PublicKey):
            return NotImplemented
        return self._key_fields() == other._key_fields()

    def __hash__(self) -> int:
        return hash(self._key_fields())

    def __str__(self) -> str:
        return self.line
