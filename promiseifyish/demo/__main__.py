"""Allow running as: python -m promiseifyish.demo"""

from promiseifyish.demo import main

main()
