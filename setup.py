from setuptools import setup, find_namespace_packages

setup(
    name="readthat",
    version="0.1.0",
    packages=find_namespace_packages(include=['cli*', 'shelf*', 'api*']),
    include_package_data=True,
    python_requires=">=3.11",
    install_requires=[
        "Click",
        "SQLAlchemy>=2.0",
        "fastapi",
        "uvicorn",
        "pydantic>=2",
        "requests",
        "python-dateutil",
    ],
    extras_require={
        "test": [
            "pytest",
            "httpx",
        ],
    },
    entry_points={
        "console_scripts": [
            "readthat=cli.main:main",
        ],
    },
)
