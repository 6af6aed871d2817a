from __future__ import annotations

from typing import TYPE_CHECKING

from mpmath.ctx_mp import MPContext

from dualroot import defaults
from dualroot.default import NoInput, _drb
from dualroot.dual.dual import INTS
from dualroot.errors import VE_DPS

if TYPE_CHECKING:
    from dualroot.typing import Any, Scalar

# Licence: Creative Commons - Attribution-NonCommercial-NoDerivatives 4.0 International
# Commercial use of this code, and/or copying and redistribution is prohibited.
# Contact rateslib at gmail.com if this code is observed outside its intended sphere.


def mp_context(dps: int | NoInput = NoInput(0)) -> MPContext:
    """
    Create an independent mpmath context with a given decimal precision.

    Parameters
    ----------
    dps: int, optional
        The number of decimal digits of working precision. Defaults to ``defaults.mp_dps``.

    Returns
    -------
    MPContext

    Notes
    -----
    Numbers created by the context, and every elementary function evaluated on them by
    *dualroot*, use this precision. The global ``mpmath.mp`` context is never modified, so
    different precisions can be used concurrently.
    """
    dps = _drb(defaults.mp_dps, dps)
    if isinstance(dps, bool) or not isinstance(dps, INTS) or dps < 1:
        raise ValueError(VE_DPS.format(dps))
    ctx = MPContext()
    ctx.dps = int(dps)
    return ctx


def mp_real(value: Any, dps: int | NoInput = NoInput(0)) -> Scalar:
    """
    Create an arbitrary precision real number.

    Parameters
    ----------
    value: int, float, str, mpf
        The value. Strings are parsed at the requested precision, e.g. ``"0.1"`` is exact to
        ``dps`` digits whereas the float ``0.1`` is not.
    dps: int, optional
        The number of decimal digits of working precision. Defaults to ``defaults.mp_dps``.

    Returns
    -------
    mpf

    Examples
    --------
    .. ipython:: python

       from dualroot import mp_real, cubic_newton, dual_cos

       x0 = mp_real(1, dps=40)
       cubic_newton(lambda x: dual_cos(x) - x, x0, steps=4)
    """
    return mp_context(dps).mpf(value)
