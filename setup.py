# setup.py
from setuptools import setup, find_packages

setup(
    name="formexpr-project",
    version="0.1.0",
    description="Conditional field expressions for JSON Schema driven forms: the formexpr library and the formedit CLI.",
    author="Your Name or Team",
    author_email="your_email@example.com",
    packages=find_packages(include=['formexpr', 'formexpr.*', 'formedit', 'formedit.*']),
    include_package_data=True,
    install_requires=[
        "click>=8.0",
        "pyyaml",
        "rich",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        'console_scripts': [
            'formedit = formedit.cli:cli',
        ],
    },
    python_requires=">=3.8",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Libraries",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
