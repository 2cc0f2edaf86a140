from setuptools import find_packages, setup

package_name = 'harvest_mission'

setup(
    name=package_name,
    version='0.1.0',
    packages=find_packages(exclude=['tests', 'tests.*']),
    python_requires='>=3.9',
    install_requires=['setuptools', 'PyYAML'],
    extras_require={
        'test': ['pytest'],
    },
    zip_safe=True,
    maintainer='Overrack Robotics',
    maintainer_email='support@overrack.ai',
    description='Serpentine field-coverage harvester with depot dump/resume and fuel budgeting.',
    license='Apache-2.0',
    entry_points={
        'console_scripts': [
            'harvest-mission = harvest_mission.cli:main',
        ],
    },
)
