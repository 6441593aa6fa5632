"""Setup script for the academic portfolio site."""
from setuptools import setup, find_packages

setup(
    name="academic_portfolio",
    version="1.0.0",
    packages=find_packages(include=["portfolio", "portfolio.*", "ui", "ui.*"]),
    package_data={
        "portfolio": ["templates/*.html"],
        "ui": ["templates/*.html", "static/*/*", "static/docs/previews/*"],
    },
    py_modules=["wsgi"],
    install_requires=[
        "requests>=2.25.0",
        "flask>=2.2.0",
        "itsdangerous>=2.0",
        "Jinja2>=3.0",
        "MarkupSafe>=2.0",
        "flask-wtf>=1.0.0",
        "flask-limiter>=3.0.0",
        "python-dotenv>=0.19.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": ["portfolio=portfolio.__main__:main"],
    },
    python_requires=">=3.8",
    description="Academic portfolio site with publication previews and download requests",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    keywords="academic portfolio publications flask",
    include_package_data=True,
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Framework :: Flask",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
    ],
)
