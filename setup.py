import setuptools

setuptools.setup(
    name="canvas-render",
    version="0.1.0",
    description="Named drawing helpers and an image registry on top of an immediate-mode 2D canvas.",
    packages=setuptools.find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "numpy",
        "Pillow>=10.1",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-timeout>=2.3",
        ],
    },
)
