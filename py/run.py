"""
Markdown 笔记服务主程序入口
用于启动FastAPI应用服务器
"""
import uvicorn
import sys
import os
import logging

# 添加当前目录到Python路径
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

# 从config.py导入配置
from config import settings

# 配置日志
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# 启动服务器
if __name__ == "__main__":
    try:
        # 获取主机和端口配置
        host = settings.HOST
        port = settings.PORT
        reload = settings.DEBUG  # 在调试模式下启用热重载

        logger.info(f"服务配置: 主机={host}, 端口={port}, 调试模式={reload}")
        logger.info(f"存储后端: {settings.storage_backend}, WebDAV: {'已配置' if settings.webdav_enabled else '未配置'}")
        logger.info(f"文档地址: http://{host}:{port}/docs")
        logger.info(f"API地址: http://{host}:{port}/api")

        # 启动UVicorn服务器
        uvicorn.run(
            "app:create_app",
            factory=True,
            host=host,
            port=port,
            reload=reload,
            log_level=settings.LOG_LEVEL.lower(),
            proxy_headers=True,
            forwarded_allow_ips="*",
        )
    except KeyboardInterrupt:
        logger.info("接收到停止信号，正在优雅退出...")
    except Exception as e:
        logger.error(f"服务启动失败: {str(e)}")
        sys.exit(1)
