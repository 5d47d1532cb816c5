from setuptools import setup, find_packages

setup(
    name="platformq-cassandra",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "cassandra-driver>=3.28.0",
        "python-snappy>=0.6.1",
        "pydantic>=2.6",
        "PyYAML>=6.0",
        "python-json-logger>=2.0.7",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    python_requires=">=3.8",
    description="Configuration-driven Cassandra session wrapper for PlatformQ",
    author="PlatformQ Team",
)
