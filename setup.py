import re

import setuptools

with open("powerwall_reserve/__init__.py", "r") as fh:
    version_tuple = re.search(r"^version_tuple = \((\d+), (\d+), (\d+)\)", fh.read(), re.M).groups()
__version__ = '.'.join(version_tuple)

with open("README.md", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name="powerwall-reserve",
    version=__version__,
    description="Scheduled job to set the Tesla Powerwall backup reserve through the Tesla energy API",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(include=["powerwall_reserve", "powerwall_reserve.*"]),
    python_requires=">=3.8",
    install_requires=[
        'requests',
        'pydantic>=2.0',
        'pydantic-settings>=2.0',
        'python-dotenv',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'powerwall-reserve=powerwall_reserve.__main__:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
