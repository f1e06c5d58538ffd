"""
Inkwell - Content pipeline for a markdown-driven static site

Installation:
    pip install -e .

This installs the 'inkwell' command and the standalone generator scripts.
"""

from setuptools import setup, find_packages
import os

# Read README for long description
long_description = ''
if os.path.exists('README.md'):
    with open('README.md', 'r', encoding='utf-8') as f:
        long_description = f.read()

setup(
    name='inkwell',
    version='1.0.0',
    description='Manifests, site index and content checks for markdown writing and courses',
    long_description=long_description,
    long_description_content_type='text/markdown',
    author='Dale Chapman',
    license='MIT',

    packages=find_packages(exclude=['tests', 'tests.*', 'docs', 'content', 'courses', 'static']),

    include_package_data=True,

    # datetime.fromisoformat accepts a trailing 'Z' from 3.11
    python_requires='>=3.11',

    install_requires=[
        'click>=8.0',
        'python-frontmatter>=1.0',
        'PyYAML>=6.0',
        'mistune>=3.0',
        'beautifulsoup4>=4.11',
        'Pillow>=11.3',
    ],

    extras_require={
        'dev': [
            'pytest>=7.4',
            'pytest-cov>=4.1',
            'pytest-mock>=3.11',
        ],
    },

    entry_points={
        'console_scripts': [
            'inkwell=inkwell.cli:cli',
            'inkwell-writing-manifest=inkwell.cli:writing_manifest_main',
            'inkwell-course-manifests=inkwell.cli:course_manifests_main',
            'inkwell-content-index=inkwell.cli:content_index_main',
            'inkwell-validate=inkwell.cli:validate_main',
            'inkwell-images=inkwell.cli:images_main',
        ],
    },

    classifiers=[
        'Development Status :: 4 - Beta',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: Text Processing :: Markup :: Markdown',
    ],

    keywords='markdown static-site manifest content validation',
)
