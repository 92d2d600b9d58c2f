# -*- coding: utf-8 -*-
"""
novelcheck/__main__.py

支持 `python -m novelcheck`，直接转发到 cli.main()。
"""

from .cli import main

if __name__ == "__main__":
	raise SystemExit(main())
