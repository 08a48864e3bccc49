from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="zipoverlay",
    version="0.1.0",
    author="Tim Hosking",
    author_email="github.com/Munger",
    description="A filesystem overlay that reads through zip archives as if they were directories",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/Munger/zipoverlay",
    project_urls={
        "Bug Tracker": "https://github.com/Munger/zipoverlay/issues",
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Topic :: System :: Filesystems",
        "Topic :: System :: Archiving",
    ],
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
)
