from setuptools import setup, find_packages

setup(name='labelboost',
      version='0.1.0',
      description='Multi-label AdaBoost.MH with binary decision stumps.',
      packages=find_packages(exclude=['tests', 'tests.*']),
      python_requires='>=3.8',
      install_requires=['numpy', 'scikit-learn', 'joblib'],
      extras_require={'test': ['pytest']})
