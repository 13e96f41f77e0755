from setuptools import setup, find_packages

setup(
    name="kev-push",
    version="1.0.0",
    description="Push notifications when CISA's Known Exploited Vulnerabilities catalog is updated",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "requests>=2.28.0",
        "click>=8.1.0",
        "rich>=13.0.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "kev-push=kev_push.cli:cli",
        ],
    },
    python_requires=">=3.8",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Topic :: Security",
    ],
)
