# This module is reserved only for typing purposes.
# It avoids all circular import by performing a TYPE_CHECKING check on any component.

from collections.abc import Callable as Callable
from collections.abc import Sequence as Sequence
from typing import Any as Any
from typing import TypeAlias

from mpmath.ctx_mp_python import _mpf
from pandas import DataFrame as DataFrame
from pandas import Series as Series

from dualroot.default import NoInput as NoInput
from dualroot.dual.dual import Dual as Dual

mpf: TypeAlias = _mpf

Scalar: TypeAlias = "float | int | mpf"
Number: TypeAlias = "Scalar | Dual"
