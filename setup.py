from setuptools import setup, find_packages


setup(
    name="pbptool",
    version="0.1",
    packages=find_packages(include=["pbptool", "pbptool.*"]),
    description="Inspect, unpack and pack PBP containers (PARAM.SFO, icons, DATA.PSP, DATA.PSAR).",
    author="vercingetorx",
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "pbptool=pbptool.cli:main",
        ]
    },
)
