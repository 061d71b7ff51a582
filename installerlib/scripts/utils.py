"""
Helpers for converting methods into scripts, and filling in arguments with host objects.
"""

from functools import wraps
from inspect import cleandoc, signature
import logging
import sys
from typing import Any, Callable, Dict, List, Optional, Union

from docopt import docopt

from ..host import Host, HelperHost
from ..plumbing.common import Context, InstallerError
from ..units import DEFAULT_UNITS, UnitSet


DocOptArgs = Dict[str, Union[bool, str, List[str]]]


ENTRYPOINTS: List[str] = []


def entrypoint(fn: Callable[..., Any]) -> Callable[..., Any]:
    """
    Decorator to make an entrypoint out of a generic function.

    This uses `docopt` to parse arguments according to the method docstring, and will be formatted
    with `{script}` set to the script name.  At minimum, it should contain `Usage: {script}`.

    Functions may optionally accept arguments, but they must be annotated with a recognised type in
    order to be filled in:

    - `DocOptArgs` (a `dict` of input parameters parsed from the usage line)
    - `Host` (the local host, acting through the privileged helper)
    - `UnitSet` (the standard agent units)
    - `Context` (a fresh cancellation context)

    An example function:

        @entrypoint
        def setup(host: Host, units: UnitSet):
            \"""
            Install the agent.

            Usage: {script}
            \"""

    Any `InstallerError` raised by the function is printed, and the script exits with status 1.
    """
    label = "installerlib-{}-{}".format(fn.__module__.rsplit(".", 1)[-1],
                                        fn.__qualname__).replace("_", "-")

    @wraps(fn)
    def wrap(opts: Optional[DocOptArgs] = None, host: Optional[Host] = None):
        extra: Dict[str, Any] = {}
        script = "{} [--debug]".format(label)
        if opts is None:
            doc = cleandoc(fn.__doc__.format(script=script))
            opts = docopt(doc)
        if opts.pop("--debug", False):
            logging.basicConfig(level=logging.DEBUG)
        # Detect resolvable-typed arguments and fill in their values.
        sig = signature(fn)
        for param in sig.parameters.values():
            name = param.name
            cls = param.annotation
            if cls is DocOptArgs:
                extra[name] = opts
            elif cls is Host:
                extra[name] = host or HelperHost()
            elif cls is UnitSet:
                extra[name] = DEFAULT_UNITS
            elif cls is Context:
                extra[name] = Context()
            else:
                raise RuntimeError("Bad parameter {!r} type {!r}".format(name, cls))
        try:
            return fn(**extra)
        except InstallerError as ex:
            error(str(ex), exit=1)
    wrap.__doc__ = wrap.__doc__.format(script=label)
    # Create a console script line for setup.
    target = "{}:{}".format(fn.__module__, fn.__qualname__)
    ENTRYPOINTS.append("{}={}".format(label, target))
    return wrap


def confirm(msg: str = "Are you sure?"):
    """
    Prompt for confirmation before destructive actions.
    """
    try:
        yn = input("\033[96m{} [yN]\033[0m ".format(msg))
    except (KeyboardInterrupt, EOFError):
        print()
        yn = "n"
    if yn.lower() not in ("y", "yes"):
        error("Aborted!", exit=1)


def error(msg: Optional[str] = None, *, exit: Optional[int] = None, colour: Optional[str] = None):
    """
    Print an error message and/or exit.
    """
    if msg:
        colour = colour or ("1" if exit else "3")
        print("\033[9{}m{}\033[0m".format(colour, msg), file=sys.stderr)
    if exit is not None:
        sys.exit(exit)
