from setuptools import find_packages, setup


setup(
    name="logtemplate",
    version="0.1.0",
    description="Named-placeholder message templates for structured logging",
    author="GAHEOS",
    python_requires=">=3.8",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["logtemplate=logtemplate.cli:main"]},
)
