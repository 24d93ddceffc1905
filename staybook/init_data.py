"""
初始化数据脚本
部署时执行一次：python -m staybook.init_data

创建：数据表、示例房型（Standard / Deluxe / Suite）、9 间房、管理员档案
重复执行是安全的。
"""
import logging

from staybook.config import settings
from staybook.database import SessionLocal, init_db
from staybook.services.setup_service import seed_sample_data


def main():
    logging.basicConfig(level=settings.LOG_LEVEL)
    init_db()
    db = SessionLocal()
    try:
        stats = seed_sample_data(db)
    finally:
        db.close()

    if stats["skipped"]:
        print("初始化数据已存在，跳过")
    else:
        print(f"✓ 初始化完成: {stats['room_types']} 个房型, {stats['rooms']} 间房")


if __name__ == '__main__':
    main()
