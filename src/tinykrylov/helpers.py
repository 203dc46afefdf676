from __future__ import annotations

__all__ = ["JAXArray"]

import jax

JAXArray = jax.Array
