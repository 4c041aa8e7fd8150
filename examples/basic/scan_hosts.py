"""Scan a hosts-style listing and report malformed entries."""

from scanr import ItemType, locate, scan

source = """127.0.0.1 localhost
10.0.0.256 broken.example
192.168.1.20 -bad-.lan
"""

for item in scan(source):
    if item.type is ItemType.ERROR:
        print(f"{locate(source, item.pos)}: invalid {item.value!r}")
