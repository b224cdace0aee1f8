#!/usr/bin/env python3

from setuptools import setup
import os


directory = os.path.dirname(os.path.realpath(__file__))


if __name__ == "__main__":
    setup(
        name="fontatlas",
        packages=[
            "fontatlas",
            "fontatlas.atlas",
            "fontatlas.cache",
            "fontatlas.graphics",
        ],
        python_requires='>3.10.0',
        version="0.1.0",
        license="MIT",
        description="Font atlas generation and kerning-aware text measurement",
        author="mirmik",
        author_email="mirmikns@yandex.ru",
        long_description=open(os.path.join(
            directory, "README.md"), "r", encoding="utf8").read(),
        long_description_content_type="text/markdown",
        keywords=["font", "atlas", "freetype", "opengl"],
        classifiers=[],
        include_package_data=True,
        install_requires=[
            "numpy",
            "PyOpenGL>=3.1",
            "Pillow>=9.0",
            "freetype-py>=2.3",
        ],
        extras_require={
            "test": ["pytest"],
        },
        entry_points={
            "console_scripts": [
                "fontatlas=fontatlas.__main__:main",
            ],
        },
        zip_safe=False,
    )
