from dataclasses import dataclass


@dataclass(frozen=True)
class LegalContext:
    """Ordered legal reference fragments used to ground an audit."""

    fragments: tuple[str, ...] = ()
    degraded: bool = False  # True when the fetch failed and the context is empty

    @property
    def text(self) -> str:
        return "\n".join(self.fragments)

    @property
    def is_empty(self) -> bool:
        return not self.fragments
