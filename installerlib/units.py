"""
Registry of the service units making up the agent.

Every agent subcomponent has one unit per channel: the stable unit is enabled and started by a
normal installation, whereas the experimental unit is only loaded, ready for a supervised trial.
"""

from enum import Enum
from typing import Iterable, NamedTuple, Tuple


class Channel(Enum):
    """
    Rollout channel of a unit.
    """

    stable = "stable"
    experimental = "experimental"


class Subcomponent(Enum):
    """
    Agent process provided by a unit.
    """

    main = "main"
    trace = "trace"
    process = "process"
    system_probe = "system-probe"
    security = "security"


class Unit(NamedTuple):
    """
    Single controllable service unit.
    """

    name: str
    channel: Channel
    subcomponent: Subcomponent

    def __str__(self):
        return self.name


class UnitSet:
    """
    Ordered stable and experimental units, one of each per subcomponent.

    Both sequences follow the same subcomponent order, which is also the order units are acted on
    (e.g. the main agent before its add-ons).
    """

    def __init__(self, stable: Iterable[Unit], experimental: Iterable[Unit]):
        self._stable = tuple(stable)
        self._experimental = tuple(experimental)
        for units, channel in ((self._stable, Channel.stable),
                               (self._experimental, Channel.experimental)):
            for unit in units:
                if unit.channel != channel:
                    raise ValueError("Unit {} is not in the {} channel".format(unit, channel.value))
        stable_subs = [unit.subcomponent for unit in self._stable]
        exp_subs = [unit.subcomponent for unit in self._experimental]
        if stable_subs != exp_subs:
            raise ValueError("Stable and experimental units don't match: {} / {}"
                             .format(", ".join(sub.value for sub in stable_subs),
                                     ", ".join(sub.value for sub in exp_subs)))
        if len(set(stable_subs)) != len(stable_subs):
            raise ValueError("Duplicate subcomponents in unit set")
        names = [unit.name for unit in self._stable + self._experimental]
        if len(set(names)) != len(names):
            raise ValueError("Duplicate unit names in unit set")

    @classmethod
    def from_names(cls, *pairs: Tuple[Subcomponent, str, str]) -> "UnitSet":
        """
        Build a unit set from `(subcomponent, stable name, experimental name)` triples.
        """
        return cls((Unit(stable, Channel.stable, sub) for sub, stable, _ in pairs),
                   (Unit(exp, Channel.experimental, sub) for sub, _, exp in pairs))

    @property
    def stable(self) -> Tuple[Unit, ...]:
        return self._stable

    @property
    def experimental(self) -> Tuple[Unit, ...]:
        return self._experimental

    def get(self, subcomponent: Subcomponent, channel: Channel = Channel.stable) -> Unit:
        """
        Look up the unit of a given subcomponent and channel.
        """
        units = self._stable if channel == Channel.stable else self._experimental
        for unit in units:
            if unit.subcomponent == subcomponent:
                return unit
        raise KeyError(subcomponent)

    def __repr__(self):
        return "<{}: {}>".format(self.__class__.__name__,
                                 ", ".join(unit.name for unit in self._stable))


DEFAULT_UNITS = UnitSet.from_names(
    (Subcomponent.main, "datadog-agent.service", "datadog-agent-exp.service"),
    (Subcomponent.trace, "datadog-agent-trace.service", "datadog-agent-trace-exp.service"),
    (Subcomponent.process, "datadog-agent-process.service", "datadog-agent-process-exp.service"),
    (Subcomponent.system_probe, "datadog-agent-sysprobe.service",
     "datadog-agent-sysprobe-exp.service"),
    (Subcomponent.security, "datadog-agent-security.service",
     "datadog-agent-security-exp.service"),
)
"""
Units of a standard agent installation.
"""
