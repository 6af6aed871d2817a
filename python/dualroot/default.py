from __future__ import annotations

from copy import deepcopy
from enum import Enum
from typing import Any

# Licence: Creative Commons - Attribution-NonCommercial-NoDerivatives 4.0 International
# Commercial use of this code, and/or copying and redistribution is prohibited.
# Contact rateslib at gmail.com if this code is observed outside its intended sphere.


class NoInput(Enum):
    """
    Enumerable type to handle setting default values.

    See :ref:`default values <defaults-doc>`.
    """

    blank = 0
    inherit = 1


def _drb(default: Any, possible_ni: Any | NoInput) -> Any:
    """(D)efault (r)eplaces (b)lank"""
    return default if isinstance(possible_ni, NoInput) else possible_ni


DEFAULTS = dict(
    # Iteration
    cubic_newton_steps=5,
    quadratic_tol=1e-15,  # machine tolerance on normal float64 is 2.22e-16
    # Arbitrary precision
    mp_dps=50,
    # Tabular output
    headers={
        "iteration": "Iteration",
        "x": "x",
        "f": "f(x)",
        "f1": "f'(x)",
        "f2": "f''(x)",
        "discriminant": "Discriminant",
        "step": "Step",
        "order": "Order",
    },
)


class Defaults:
    """
    The *defaults* object used when arguments are omitted. Values are printed below:

    .. ipython:: python

       from dualroot import defaults
       print(defaults.print())

    Notes
    -----
    The differentiation and iteration functions only read these values to resolve omitted
    arguments. Nothing in *dualroot* writes to this object.
    """

    _instance = None

    cubic_newton_steps: int
    quadratic_tol: float
    mp_dps: int
    headers: dict[str, str]

    def __new__(cls) -> Defaults:
        if cls._instance is None:
            cls._instance = super(Defaults, cls).__new__(cls)  # noqa: UP008
            for k, v in DEFAULTS.items():
                setattr(cls._instance, k, deepcopy(v))

        return cls._instance

    def reset_defaults(self) -> None:
        """
        Revert defaults back to their initialisation status.

        Examples
        --------
        .. ipython:: python

           from dualroot import defaults
           defaults.reset_defaults()
        """
        attrs = [
            v
            for v in dir(self)
            if "__" not in v and not callable(getattr(self, v)) and v != "_instance"
        ]
        for attr in attrs:
            delattr(self, attr)

        for k, v in DEFAULTS.items():
            setattr(self, k, deepcopy(v))

    def print(self) -> str:
        """
        Return a string representation of the current values in the defaults object.
        """

        def _t_n(v: str) -> str:  # teb-newline
            return f"\t{v}\n"

        _: str = f"""\
Iteration:\n
{"".join([_t_n(f"{attribute}: {getattr(self, attribute)}") for attribute in ["cubic_newton_steps", "quadratic_tol"]])}
Precision:\n
{"".join([_t_n(f"{attribute}: {getattr(self, attribute)}") for attribute in ["mp_dps"]])}
Miscellaneous:\n
{"".join([_t_n(f"{attribute}: {getattr(self, attribute)}") for attribute in ["headers"]])}
"""  # noqa: W291, E501
        return _


__all__ = ["Defaults", "NoInput"]
