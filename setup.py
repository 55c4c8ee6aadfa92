from setuptools import setup, find_packages


# Read README for long description
def read_readme():
    try:
        with open("README.md", "r", encoding="utf-8") as f:
            return f.read()
    except FileNotFoundError:
        return "Thompson construction of NFA fragments for regex compilation"


setup(
    name="regex-anfa",
    version="0.1.0",
    description="Thompson construction of NFA fragments for regex compilation",
    long_description=read_readme(),
    long_description_content_type="text/markdown",
    packages=find_packages(include=["regex_anfa", "regex_anfa.*"]),
    python_requires=">=3.8",
    install_requires=[
        "pandas>=1.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=6.0",
            "pytest-cov",
            "black",
            "flake8",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Compilers",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    keywords="regex, nfa, thompson construction, automata",
)
