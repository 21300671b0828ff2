"""Feature flags reported by ``status features`` and ``status test-feature``."""

from collections.abc import Iterable, Mapping

from pydantic import BaseModel, ConfigDict

from shellstatus.models import FeatureDescriptor


class FeatureFlag(BaseModel):
    """Static metadata for a feature flag."""

    model_config = ConfigDict(frozen=True)

    name: str
    groups: str
    description: str
    default_value: bool


KNOWN_FEATURES: tuple[FeatureFlag, ...] = (
    FeatureFlag(
        name='stderr-nocaret',
        groups='3.0',
        description='^ no longer redirects stderr',
        default_value=True,
    ),
    FeatureFlag(
        name='qmark-noglob',
        groups='3.0',
        description='? no longer globs',
        default_value=False,
    ),
    FeatureFlag(
        name='regex-easyesc',
        groups='3.1',
        description="string replace -r needs fewer \\'s",
        default_value=True,
    ),
    FeatureFlag(
        name='ampersand-nobg-in-token',
        groups='3.4',
        description='& only backgrounds if followed by a separator',
        default_value=True,
    ),
)


class UnknownFeatureError(KeyError):
    """Raised when a feature name is not registered."""


class FeatureRegistry:
    """Feature flags and their current on/off values."""

    def __init__(
        self,
        flags: Iterable[FeatureFlag] = KNOWN_FEATURES,
        overrides: Mapping[str, bool] | None = None,
    ) -> None:
        self._flags = tuple(flags)
        self._values = {flag.name: flag.default_value for flag in self._flags}
        for name, value in (overrides or {}).items():
            self.set(name, value=value)

    def set(self, name: str, *, value: bool) -> None:
        if name not in self._values:
            raise UnknownFeatureError(name)
        self._values[name] = value

    def feature_test(self, name: str) -> bool:
        """Return whether a registered feature is on."""
        try:
            return self._values[name]
        except KeyError:
            raise UnknownFeatureError(name) from None

    def feature_metadata(self) -> list[FeatureDescriptor]:
        """Return every feature in registration order with its current value."""
        return [
            FeatureDescriptor(
                name=flag.name,
                enabled=self._values[flag.name],
                groups=flag.groups,
                description=flag.description,
            )
            for flag in self._flags
        ]
