from setuptools import setup, find_namespace_packages  # type: ignore

setup(
    name="timeperiod",
    version="0.1.0",
    description="time period value type with pattern based formatting and parsing",
    packages=find_namespace_packages(include=["timeperiod*"]),
    package_data={"timeperiod": ["py.typed"]},
    python_requires=">=3.10",
    install_requires=["python-dotenv"],
    extras_require={"test": ["pytest"]},
)
