import sys
import setuptools
from setuptools import setup

from cloudprovision import __version__


def readme():
    with open('README.md', encoding="UTF-8") as f:
        return f.read()


if sys.version_info < (3, 8):
    sys.exit('Python < 3.8 is not supported!')


setup(
    name='cloudprovision',
    version=__version__,
    description='Declarative lifecycle management of object storage containers on top of cloud storage SDKs',
    long_description_content_type="text/markdown",
    long_description=readme(),
    packages=setuptools.find_packages(exclude=["tests.*", "tests"]),
    install_requires=[
        "tqdm>=4.64.1",
        "azure-storage-blob>=12.14.1",
        "python-swiftclient>=4.0.0",
        "pydantic>=2.0",
    ],
    extras_require={
        "test": ["pytest"],
    },
    classifiers=[],
    include_package_data=True,
    keywords="python cloud object storage container swift azure provisioning".split(" "),
    zip_safe=False,
)
