from setuptools import find_packages, setup

setup(
    name="slidescript-backend",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["app", "database"],
    python_requires=">=3.11",
    install_requires=[
        "fastapi>=0.110",
        "pydantic>=2.0",
        "aiohttp>=3.9",
        "python-dotenv>=1.0",
        "PyYAML>=6.0",
        "SQLAlchemy>=2.0",
        "uvicorn>=0.27",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
            "httpx>=0.25",
        ],
    },
    package_data={"services.script_planner": ["config/*.yaml"]},
    include_package_data=True,
    description="Backend package for SlideScript (slide segmentation and speaking-script timing)",
    author="Andreas Malathouras",
    author_email="steelstridertgm@gmail.com",
)
