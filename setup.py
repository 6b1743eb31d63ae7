from pathlib import Path

from setuptools import find_packages, setup


HERE = Path(__file__).parent
with (HERE / "requirements.txt").open("r") as f:
    INSTALL_REQUIRES = [x.strip() for x in f.readlines() if x.strip()]
with (HERE / "test_requirements.txt").open("r") as f:
    TESTS_REQUIRE = [x.strip() for x in f.readlines() if x.strip()]
with (HERE / "typedgit2" / "version.py").open("r") as f:
    version = {}
    exec(f.read(), version)
    VERSION = version["__version__"]


setup(
    name="typedgit2",
    version=VERSION,
    description="Typed wrapper around the libgit2 C library",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Version Control :: Git",
    ],
    license="MIT",
    platforms=["GNU/Linux"],
    keywords="git libgit2 ctypes",
    packages=find_packages(include=["typedgit2", "typedgit2.*"]),
    include_package_data=True,
    package_data={},
    zip_safe=False,
    python_requires=">=3.10",
    install_requires=INSTALL_REQUIRES,
    tests_require=TESTS_REQUIRE,
    extras_require={"test": TESTS_REQUIRE},
    entry_points={"console_scripts": ["typedgit2 = typedgit2.cli:cli"]},
)
