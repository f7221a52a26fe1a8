# --coding:utf-8--
__version__ = "0.1.0"
__image__ = r"""
            _ _
  ___ __ _ | | | __ _  ___ _ __
 / __/ _` || | |/ _` |/ _ \ '_ \
| (_| (_| || | | (_| |  __/ | | |
 \___\__,_||_|_|\__, |\___|_| |_|
                |___/
"""
