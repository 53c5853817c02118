from setuptools import setup
import os

# Read version from version module
def get_version():
    version_file = os.path.join(os.path.dirname(__file__), 'sharemount', '_version.py')
    with open(version_file, 'r') as f:
        for line in f:
            if line.startswith('__version__'):
                return line.split('=')[1].strip().strip('"\'')
    raise RuntimeError('Unable to find version string.')

# Read requirements from requirements.txt
with open(os.path.join(os.path.dirname(__file__), "requirements.txt")) as f:
    requirements = [line.strip() for line in f.readlines() if line.strip() and not line.startswith("#")]

setup(
    name="sharemount",
    version=get_version(),
    description="Mount Windows shares through GVFS and keep symbolic links to them",
    long_description="Mount a declared set of Windows shares through GVFS without root "
                     "privileges and maintain a readable symbolic link for each of them",
    license="MIT",
    packages=["sharemount", "sharemount.handlers"],
    install_requires=requirements,
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "console_scripts": [
            "mount-windows-shares=sharemount.cli:main",
            "sharemount-config=sharemount.mountconfig:main",
            "sharemount-server=sharemount.server:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: POSIX :: Linux",
    ],
    python_requires=">=3.7",
)
