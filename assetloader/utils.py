from typing import Union


def format_size(size: Union[int, float]) -> str:
    """把字节数格式化为易读的字符串"""
    for unit in ("B", "KB", "MB", "GB"):
        if size < 1024:
            return f"{size:.2f} {unit}" if unit != "B" else f"{int(size)} B"
        size /= 1024
    return f"{size:.2f} TB"
