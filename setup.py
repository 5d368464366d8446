from setuptools import setup, find_namespace_packages

setup(
    name="esclient",
    version="0.1.0",
    packages=find_namespace_packages(include=["src", "src.esclient*"]),
    install_requires=[
        "httpx",
        "pydantic>=2",
        "pydantic-settings",
        "pyyaml",
    ],
    extras_require={
        "airflow": ["apache-airflow"],
        "test": ["pytest", "pytest-asyncio"],
    },
    python_requires=">=3.9",
)
