"""
Development server launcher
"""

import uvicorn

from qahq.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "qahq.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
