# https://packaging.python.org/en/latest/
# https://packaging.python.org/en/latest/guides/modernize-setup-py-project/
from pathlib import Path
import re
from setuptools import setup, find_packages


this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text()

# version must be in X.X.X format, e.g., "0.0.3dev"
text = (this_directory / 'pairedt2' / '__init__.py').read_text()
match = re.search(r"__version__ = '([.\w]+)'", text)
if match is None:
    raise ValueError("No valid version string found in:\n\n" + text)
version = match.group(1)

setup(
    name='pairedt2',
    version=version,
    description="Paired Hotelling's T-squared test for repeated multivariate measures",
    license='BSD (3-clause)',
    long_description=long_description,
    long_description_content_type='text/markdown',
    python_requires='>=3.8',
    install_requires=[
        'numpy >= 1.20',
        'scikit-learn >= 0.24',
        'scipy >= 1.5',
        'tqdm >= 4.40',
    ],
    extras_require={
        'test': [
            'pandas',
            'pytest',
        ],
    },
    packages=find_packages(),
)
