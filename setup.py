"""
Setup script for exam-planner.

exam-planner turns a learner's topic-performance history into a
prioritized daily and weekly study schedule for JEE / NEET / CET
aspirants, along with a Brain Score, a rank prediction and
gamification (levels, achievements, daily challenges).

The 'studyplan' command reads a JSON snapshot and prints plans.
"""

from setuptools import find_packages, setup

setup(
    name="exam-planner",
    version="1.0.0",
    description="Personalized study-plan engine for competitive-exam preparation",
    long_description=open("README.md", encoding="utf-8").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["config"],
    python_requires=">=3.11",
    install_requires=[
        # CLI
        "typer>=0.9.0",
        "rich>=13.0.0",
        # Config & Validation
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        # Logging
        "loguru>=0.7.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "ruff>=0.1.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "studyplan=studyplan.cli.planner_commands:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Education",
    ],
    keywords="study-plan exam-preparation jee neet gamification cli education",
)
