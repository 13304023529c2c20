# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="slotform",
    version="0.1.0",
    description="A small Lisp whose defclass* infers slot types and default values",
    packages=find_namespace_packages(include=["slotform", "slotform.*"]),
    python_requires=">=3.10",
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    zip_safe=False,
)
