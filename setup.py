from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh if line.strip() and not line.startswith('#')]

setup(
    name="labdesk",
    version="1.0.0",
    author="liamsdat",
    author_email="liamsdat@icloud.com",
    description="Учет лабораторных тестов: счета, лист ожидания и этапы выполнения",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="None",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Healthcare Industry",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Topic :: Scientific/Engineering :: Medical Science Apps.",
        "Topic :: Office/Business :: Financial :: Point-Of-Sale",
        "Topic :: Utilities",
    ],
    python_requires=">=3.8",
    install_requires=requirements,
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "labdesk=labdesk.cli:cli",
        ],
    },
    include_package_data=True,
)
