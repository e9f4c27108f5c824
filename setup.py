from setuptools import setup, find_packages

setup(
    name="circlehough",
    version="1.0.0",
    description="Circle detection with a 3D Hough accumulator",
    author="circlehough",
    packages=find_packages(include=["circlehough", "circlehough.*"]),
    install_requires=[
        "opencv-python>=4.8.0",
        "numpy>=1.24.0",
        "pyyaml>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "scikit-image>=0.21.0",
        ],
    },
    python_requires=">=3.9",
)
