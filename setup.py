"""
Setup script for the gradapp-dashboard project.

Allows development installation with `pip install -e .`
"""

from setuptools import setup, find_packages

setup(
    name="gradapp-dashboard",
    version="0.3.0",
    packages=find_packages(include=["dashboard", "dashboard.*"]),
    py_modules=["version"],
    include_package_data=True,
    package_data={"dashboard": ["templates/*.html", "templates/partials/*.html"]},
    python_requires=">=3.11",
    install_requires=[
        "flask>=3.0",
        "requests>=2.31",
        "python-dotenv>=1.0",
        "pydantic>=2.5",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-mock>=3.12",
        ],
    },
)
