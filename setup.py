from setuptools import setup, find_namespace_packages

setup(
    name="library_manager",
    version="0.1.0",
    packages=find_namespace_packages(include=['cli*', 'lms*']),
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        "Click",
        "SQLAlchemy>=2.0",
        "pydantic[email]>=2.0",
        "bcrypt",
        "python-dotenv",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "lms=cli.main:main",
        ],
    },
)
