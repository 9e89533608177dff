from setuptools import setup, find_packages

setup(
    name="thermaliq",
    version="0.1.0",
    description="Physics-based HVAC setback recommendation engine",
    packages=find_packages(include=["thermaliq", "thermaliq.*"]),
    py_modules=["main"],
    install_requires=[
        "numpy",
        "pandas",
        "scipy",
        "matplotlib",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
