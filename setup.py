import os.path

from setuptools import find_packages, setup


def read(fname):
    path = os.path.join(os.path.dirname(__file__), fname)
    with open(path, "r") as rfile:
        return rfile.read()


setup(
    name="shopify_resource",
    version="0.3.0",
    description="Active-record style models for the Shopify admin REST API",
    license="MIT",
    long_description=read("README.rst"),
    author="shopify_resource contributors",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    install_requires=[
        "python-dotenv>=0.19",
    ],
    extras_require={
        "requests": ["requests>=2.20"],
        "test": ["pytest>=6.0", "pytest-mock>=3.0", "requests>=2.20"],
    },
    keywords=["shopify", "api-wrapper", "rest", "active-record"],
    python_requires=">=3.8",
    package_dir={"": "src"},
    packages=find_packages("src"),
)
