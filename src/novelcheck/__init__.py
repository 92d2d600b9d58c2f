# -*- coding: utf-8 -*-
"""novelcheck：网络小说 txt 入库前的编码识别、拆章与完整性校验。"""

__version__ = "0.1.0"
