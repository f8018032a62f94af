# tests/core/__init__.py

"""
core 패키지(설정, 보안, 저장소 포트, 데이터베이스)에 대한 단위 테스트 패키지입니다.
"""
