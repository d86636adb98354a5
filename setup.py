from __future__ import annotations

import os

from setuptools import find_packages, setup

dependencies = [
    "chia_rs>=0.5.2",  # Sized integer types for the socket address fields
    "colorlog>=6.8.2",  # Adds color to logs
    "concurrent-log-handler>=0.9.25",  # Concurrently log and rotate logs
    "PyYAML>=6.0.1",  # Used for config file format
    "typing-extensions>=4.10.0",  # typing backports like final
]

dev_dependencies = [
    "coverage>=7.4.1",
    "pytest>=8.0.2",
    "pytest-cov>=4.1.0",
    "pytest-mock>=3.12.0",
    "pytest-xdist>=3.5.0",
    "isort>=5.13.2",
    "flake8>=7.0.0",
    "mypy>=1.8.0",
    "black>=23.12.1",
    "types-pyyaml>=6.0.12.12",
    "types-setuptools>=69.1.0.20240217",
]

kwargs = dict(
    name="hostaddr",
    description="IPv4 and IPv6 socket endpoint addresses and blocking host name resolution.",
    license="Apache License",
    python_requires=">=3.10, <4",
    keywords="socket address resolution getaddrinfo ipv4 ipv6",
    install_requires=dependencies,
    extras_require=dict(
        dev=dev_dependencies,
    ),
    packages=find_packages(include=["hostaddr", "hostaddr.*"]),
    package_data={"": ["py.typed"]},
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    zip_safe=False,
)

if len(os.environ.get("HOSTADDR_SKIP_SETUP", "")) < 1:
    setup(**kwargs)  # type: ignore
