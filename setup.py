from setuptools import find_packages, setup

setup(
    name="slide-narration-backend",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["app", "bootloader"],
    python_requires=">=3.10",
    install_requires=[
        "fastapi",
        "uvicorn",
        "pydantic>=2",
        "python-dotenv",
        "PyYAML",
        "playwright",
        "google-genai",
        "openai>=1.0",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
            "httpx",
        ],
    },
    include_package_data=True,
    description="Backend for slide deck narration (page rendering, slide detection and LLM narration)",
    author="Slide Narration Backend maintainers",
)
