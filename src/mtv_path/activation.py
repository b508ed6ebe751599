"""
Elementwise activation functions applied to transformed vectors.

Activations run after the path backends and never feed back into them.
Custom activations are sympy expressions in x, compiled with lambdify.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Optional

import numpy as np
import sympy

ActivationFunction = Callable[[np.ndarray], np.ndarray]


def _identity(x):
    return np.asarray(x, dtype=float)


def _relu(x):
    return np.maximum(0.0, x)


def _sigmoid(x):
    return 1.0 / (1.0 + np.exp(-np.asarray(x, dtype=float)))


def _tanh(x):
    return np.tanh(x)


def _leaky_relu(x):
    x = np.asarray(x, dtype=float)
    return np.maximum(0.1 * x, x)


def _elu(x):
    x = np.asarray(x, dtype=float)
    return np.where(x >= 0, x, np.expm1(np.minimum(x, 0.0)))


ACTIVATION_FUNCTIONS: Dict[str, ActivationFunction] = {
    "identity": _identity,
    "relu": _relu,
    "sigmoid": _sigmoid,
    "tanh": _tanh,
    "leakyRelu": _leaky_relu,
    "elu": _elu,
}

PRESET_ACTIVATIONS = [
    ("Identity", "identity"),
    ("ReLU", "relu"),
    ("Sigmoid", "sigmoid"),
    ("Tanh", "tanh"),
    ("Leaky ReLU", "leakyRelu"),
    ("ELU", "elu"),
    ("Custom", "custom"),
]


@dataclass
class ActivationResult:
    """Resolved activation, or the reason it could not be built."""
    fn: Optional[ActivationFunction]
    error: Optional[str] = None


def parse_custom_activation(expression: str) -> ActivationResult:
    """
    Compile a custom activation expression in the variable x.

    An empty expression means identity. Values that come out non-finite
    are replaced by NaN.

    Args:
        expression: e.g. "x**2", "sin(x) + x/2"

    Returns:
        ActivationResult with fn set on success, error otherwise
    """
    if not expression.strip():
        return ActivationResult(_identity)

    x = sympy.Symbol("x")
    try:
        expr = sympy.sympify(expression, locals={"x": x})
    except (sympy.SympifyError, SyntaxError, TypeError) as e:
        return ActivationResult(None, f"Invalid expression: {e}")

    if expr.free_symbols - {x}:
        names = ", ".join(sorted(str(s) for s in expr.free_symbols - {x}))
        return ActivationResult(
            None, f"Unknown symbols {names}. Ensure you use 'x' as the variable."
        )

    compiled = sympy.lambdify(x, expr, modules="numpy")

    def fn(values):
        arr = np.asarray(values, dtype=float)
        with np.errstate(all="ignore"):
            out = np.asarray(compiled(arr), dtype=complex)
        real = np.where(np.abs(out.imag) > 0, np.nan, out.real)
        real = np.broadcast_to(real, arr.shape).astype(float)
        return np.where(np.isfinite(real), real, np.nan)

    probe = fn(np.array([1.0]))
    if not np.isfinite(probe[0]):
        return ActivationResult(
            None, "Function did not return a valid number. Ensure you use 'x' as the variable."
        )
    return ActivationResult(fn)


def resolve_activation(name: str = "identity", custom_expression: str = "") -> ActivationResult:
    """
    Look up a named activation or compile a custom one.

    Args:
        name: Key of ACTIVATION_FUNCTIONS, or "custom"
        custom_expression: Expression used when name == "custom"
    """
    if name == "custom":
        return parse_custom_activation(custom_expression)
    fn = ACTIVATION_FUNCTIONS.get(name)
    if fn is None:
        return ActivationResult(None, f"Unknown activation function: {name}")
    return ActivationResult(fn)
