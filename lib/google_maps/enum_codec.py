"""
Token <-> enum conversion for closed API vocabularies.

Every vocabulary is a ``StrEnum`` whose values are the exact wire tokens.
An :class:`EnumTable` wraps one such enum with a lookup dictionary built once
at import time. Decoding never fails: a token the table does not know comes
back as an :class:`Unrecognized` value that still carries the raw token, so
new server-side vocabulary does not break older clients.
"""

import logging
from enum import StrEnum
from typing import Dict, Generic, List, Mapping, Optional, Type, TypeVar, Union

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=StrEnum)


class Unrecognized(str):
    """Fallback value for a token outside a closed vocabulary, dood!

    Behaves as the raw token string and remembers which vocabulary
    failed to recognise it.

    Attributes:
        vocabulary: Name of the enum the token was decoded against
    """

    vocabulary: str

    def __new__(cls, token: str, vocabulary: str) -> "Unrecognized":
        obj = super().__new__(cls, token)
        obj.vocabulary = vocabulary
        return obj

    @property
    def token(self) -> str:
        return str.__str__(self)

    def __getnewargs__(self):
        return (self.token, self.vocabulary)

    def __repr__(self) -> str:
        return f"Unrecognized({self.vocabulary}, {self.token!r})"


def isUnrecognized(value: object) -> bool:
    """Check whether a decoded value is the fallback variant."""
    return isinstance(value, Unrecognized)


class EnumTable(Generic[E]):
    """Bidirectional token table for one StrEnum vocabulary, dood!

    Args:
        enumType: StrEnum whose values are the canonical tokens
        aliases: Extra tokens accepted by decode(), e.g. upper case variants
            the server uses in responses
        caseInsensitive: Fall back to a lower case lookup for unknown tokens

    Example:
        >>> TRAVEL_MODES = EnumTable(TravelMode, caseInsensitive=True)
        >>> TRAVEL_MODES.decode("DRIVING")
        <TravelMode.DRIVING: 'driving'>
        >>> TRAVEL_MODES.decode("hovercraft")
        Unrecognized(TravelMode, 'hovercraft')
        >>> TRAVEL_MODES.encode(TravelMode.WALKING)
        'walking'
    """

    def __init__(
        self,
        enumType: Type[E],
        *,
        aliases: Optional[Mapping[str, E]] = None,
        caseInsensitive: bool = False,
    ):
        self.enumType = enumType
        self.name = enumType.__name__
        self._caseInsensitive = caseInsensitive
        self._byToken: Dict[str, E] = {member.value: member for member in enumType}
        if aliases:
            for alias, member in aliases.items():
                if alias in self._byToken and self._byToken[alias] is not member:
                    raise ValueError(f"Alias '{alias}' already maps to {self._byToken[alias]!r}")
                self._byToken[alias] = member
        self._byLowerToken: Dict[str, E] = (
            {token.lower(): member for token, member in self._byToken.items()} if caseInsensitive else {}
        )

    def decode(self, token: str) -> Union[E, Unrecognized]:
        """Convert a wire token into its enum member, or the fallback variant."""
        member = self._byToken.get(token)
        if member is None and self._caseInsensitive:
            member = self._byLowerToken.get(token.lower())
        if member is None:
            logger.debug(f"Unrecognized {self.name} token '{token}', dood!")
            return Unrecognized(token, self.name)
        return member

    def encode(self, value: Union[E, Unrecognized]) -> str:
        """Convert an enum member (or fallback variant) into its wire token."""
        if isinstance(value, Unrecognized):
            return value.token
        if not isinstance(value, self.enumType):
            raise TypeError(f"{value!r} is not a {self.name}")
        return value.value

    def parse(self, token: str) -> E:
        """
        Strict variant of decode() for caller input.

        Raises:
            ValueError: If the token is not part of the vocabulary
        """
        value = self.decode(token)
        if isinstance(value, Unrecognized):
            raise ValueError(f"'{token}' is not a valid {self.name}, expected one of: {', '.join(self.tokens())}")
        return value

    def tokens(self) -> List[str]:
        """Canonical tokens in declaration order."""
        return [member.value for member in self.enumType]

    def __contains__(self, token: object) -> bool:
        return isinstance(token, str) and not isUnrecognized(self.decode(token))

    def __len__(self) -> int:
        return len(self.enumType)

    def __repr__(self) -> str:
        return f"EnumTable({self.name}, {len(self)} tokens)"
