# SPDX-FileCopyrightText: 2025 shamir-audit contributors
# SPDX-License-Identifier: MIT

from setuptools import find_packages, setup

setup(
    name="shamir-audit",
    version="0.1.0",
    description="Exact Shamir share reconstruction with a vote-based integrity audit",
    author="shamir-audit contributors",
    license="MIT",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.9",
    install_requires=[
        "click<9.0,>=8.1",
        "cryptography>=38.0.4",
        "prometheus-client<1.0,>=0.16.0",
        "PyYAML<7.0,>=6.0",
        "tabulate>=0.9",
        "tqdm>=4.66.0",
    ],
    extras_require={
        # тестирование
        "test": [
            "pytest>=8.0.0",
            "pytest-timeout>=2.3.0",
            "hypothesis>=6.0.0",
        ],
        # линтеры и форматтеры
        "dev": [
            "ruff>=0.2.0",
            "black>=23.1.0",
            "isort>=5.10.1",
            "mypy>=1.8.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "shamir-audit=shamir_audit.cli:main",
        ],
    },
)
