# -*- coding: utf-8 -
#
# Licensed under the Apache License, Version 2.0 (the "License"); you may not
# use this file except in compliance with the License. You may obtain a copy of
# the License at
#
#   http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS, WITHOUT
# WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. See the
# License for the specific language governing permissions and limitations under
# the License.

from setuptools import setup
from statsd_client import __version__

setup(
    name='statsd-client',
    version=__version__,

    description='StatsD client batching metrics into UDP packets, with shared DNS resolution across child clients',
    license='ASF2.0',

    classifiers=[
        'Development Status :: 4 - Beta',
        'Environment :: Other Environment',
        'Intended Audience :: Developers',
        'Intended Audience :: System Administrators',
        'License :: OSI Approved :: Apache Software License',
        'Operating System :: MacOS :: MacOS X',
        'Operating System :: POSIX',
        'Operating System :: POSIX :: Linux',
        'Operating System :: Unix',
        'Programming Language :: Python',
        "Programming Language :: Python :: 3",
        'Topic :: System :: Networking :: Monitoring',
        'Topic :: Utilities',
    ],
    zip_safe=False,
    packages=['statsd_client'],
    include_package_data=True,
    python_requires='>=3.5',
    extras_require={
        'test': ['pytest'],
    },

    entry_points="""\
    [console_scripts]
    statsd-client=statsd_client.main:main
    """
)
