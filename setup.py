from setuptools import setup, find_packages


setup(
    version="0.1.0",
    name="aiofetcher",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    package_data={"aiofetcher": ["py.typed"]},
    python_requires=">=3.8",
    install_requires=[
        "yarl>=1.9.0",
        "multidict>=6.0.0",
        "httpx>=0.23.0",
        "aiohttp>=3.8.0",
        "typing_extensions>=4.0.0; python_version < '3.10'",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
        ],
    },
)
