from setuptools import setup, find_packages

setup(
    name="numlib-quadrature",
    version="0.1.0",
    description="Classical quadrature rules: trapezoidal, Simpson, Romberg and Gauss-Legendre",
    author="numlib contributors",
    packages=find_packages(include=["numlib", "numlib.*"]),
    install_requires=[
        "matplotlib",
        "pandas",
    ],
    extras_require={
        "test": ["pytest"],
    },
    include_package_data=True,
    python_requires=">=3.11",
)
