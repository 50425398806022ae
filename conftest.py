import os

# whiteboard.config.config는 import 시점에 Settings()를 생성하므로
# 테스트 수집 전에 필수 환경변수를 채워둡니다.
# 실제 값이 whiteboard/config/.env 나 환경변수에 있으면 그 값을 사용합니다.
_TEST_ENV = {
    "MONGODB__HOST": "127.0.0.1",
    "MONGODB__USER": "root",
    "MONGODB__PASSWD": "password",
    "MONGODB__PORT": "27017",
    "MONGODB__DB": "whiteboard_test",
    "JWT__SECRET_KEY": "test-secret-key-for-whiteboard-tests",
}

for key, value in _TEST_ENV.items():
    os.environ.setdefault(key, value)
