"""
Setup configuration for Code Debug Helper
"""
from setuptools import setup, find_namespace_packages
from pathlib import Path

# Read README
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text(encoding="utf-8") if readme_file.exists() else ""

setup(
    name="code-debug-helper",
    version="1.0.0",
    description="Paste broken code, get the errors explained and fixed - an AI tutor for CS students",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="MIT",
    packages=find_namespace_packages(include=["core", "core.*", "services", "services.*"]),
    py_modules=["app"],
    python_requires=">=3.10",
    install_requires=[
        "gradio>=6.0.0",
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        "python-dotenv>=1.0.0",
        "langchain-core>=0.3.0",
        "langchain-openai>=0.2.0",
        "langchain-google-genai>=2.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "black>=23.0",
            "flake8>=6.0",
            "mypy>=1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "code-debug-helper=app:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Web Environment",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Education",
        "Topic :: Software Development :: Debuggers",
    ],
    keywords=[
        "education",
        "debugging",
        "code-review",
        "ai",
        "gemini",
        "gradio",
    ],
)
