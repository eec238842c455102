import setuptools

__version__ = '0.1.0'


with open("README.md", "r") as fh:
    long_description = fh.read()


setuptools.setup(
    name='fncompose',
    version=__version__,
    license='GPL 3.0',
    description='Function composition tools: binary and n-ary composers, operator syntax, YAML defined pipelines.',
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        # complete classifier list: http://pypi.python.org/pypi?%3Aaction=list_classifiers
        'Development Status :: 3 - Alpha',
        'License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)',
        'Programming Language :: Python :: 3',
        'Intended Audience :: Developers',
        'Topic :: Software Development :: Libraries',
    ],

    keywords=['functional programming', 'composition', 'pipeline'],

    packages=setuptools.find_packages(where='src'),
    package_dir={'': 'src'},

    include_package_data=True,
    zip_safe=False,
    install_requires=['attrs', 'pyyaml'],
    python_requires='>=3.8',
    extras_require={
        'test': ['pytest', 'numpy'],
    },
)
