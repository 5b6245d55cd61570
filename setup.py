import setuptools

try:
    with open("README.md", "r", encoding="utf-8") as fh:
        long_description = fh.read()
except FileNotFoundError:
    long_description = "Deliver content packages to AEM / Sling package managers"

setuptools.setup(
    name="packmgr-sender",
    version="0.1.0",
    description="Deliver content packages to AEM / Sling package managers",
    long_description=long_description,
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=setuptools.find_packages(where="src", include=["packmgr_sender", "packmgr_sender.*"]),
    install_requires=[
        "httpx",
        "pydantic>=2",
        "python-dotenv",
        "rich",
        "typer",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
        ],
    },
    entry_points={
        "console_scripts": [
            "packmgr-send=packmgr_sender.cli.main:app",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
)
