# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="embedfs",
    version="1.0.0",
    description="Embed a directory tree in Python source and serve it as a virtual filesystem",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["embedfs", "embedfs.*"]),
    python_requires=">=3.9",
    install_requires=[
        "fastapi",  # HTTP serving adapter (embedfs.interface.web)
    ],
    extras_require={
        "test": [
            "pytest",
            "httpx",  # fastapi.testclient
        ],
    },
    entry_points={
        'console_scripts': [
            'embedfs=embedfs.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
