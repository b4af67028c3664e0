from setuptools import find_packages, setup

setup(
    name="handlevec",
    version="0.1.0",
    description="Index-style iteration over a list with insertion and deletion through position handles",
    author="Meta Platforms, Inc. and affiliates.",
    packages=find_packages(include=["handlevec", "handlevec.*"]),
    python_requires=">=3.10",
    install_requires=["pydantic>=2"],
    extras_require={"test": ["pytest"]},
)
