"""
cli - acc 명령줄 인터페이스

Click 기반 명령어와 rich 콘솔 출력을 제공합니다.
"""
