from __future__ import annotations


class Vector(list):
    """A one-dimensional array, read from #(...) and built by (vector ...).

    Subclasses list for storage only: a Vector is data, never a form to call,
    and the evaluator returns it unchanged.
    """

    def __repr__(self) -> str:
        return f"Vector({list.__repr__(self)})"
