from typing import Any

import jax
import jax.numpy as jnp


def coloring_str(string: str, color: tuple[int, int, int]) -> str:
    r, g, b = color
    return f"\x1b[38;2;{r};{g};{b}m{string}\x1b[0m"


def states_equal(left: Any, right: Any) -> bool:
    """Leaf-wise equality for pytrees of arrays (chex dataclasses included)."""
    left_leaves, left_tree = jax.tree_util.tree_flatten(left)
    right_leaves, right_tree = jax.tree_util.tree_flatten(right)
    if left_tree != right_tree:
        return False
    return all(bool(jnp.array_equal(x, y)) for x, y in zip(left_leaves, right_leaves))
