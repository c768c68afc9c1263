from sqlalchemy import Column, Integer, BigInteger, Float, Text
from database.db import Base

# 컬럼 타입별 최대값 (Integer는 DB에 따라 32비트)
INTEGER_MAX = 2**31 - 1
BIGINT_MAX = 2**63 - 1


class StudentResult(Base):
    __tablename__ = "student_results"  # 학생 성적 기록 테이블

    id = Column(Integer, primary_key=True, autoincrement=False)  # 저장소가 부여하는 ID (재사용 안 함)
    roll_number = Column(Text, nullable=False)                   # 학번 (자유 텍스트)
    student_name = Column(Text, nullable=False)                  # 학생 이름 (자유 텍스트)
    maths = Column(Integer, nullable=False)                      # 수학
    science = Column(Integer, nullable=False)                    # 과학
    english = Column(Integer, nullable=False)                    # 영어
    tamil = Column(Integer, nullable=False)                      # 타밀어
    computer_science = Column(Integer, nullable=False)           # 컴퓨터 과학
    total = Column(Integer, nullable=False)                      # 총점 (0~500)
    average = Column(Float, nullable=False)                      # 평균 (반올림 없이 저장)
    grade = Column(Text, nullable=False)                         # 등급 (A, B, C, Fail)
    timestamp = Column(BigInteger, nullable=False)               # 생성 시각 (epoch ms, 호출자 지정)


class ResultSequence(Base):
    __tablename__ = "result_sequence"  # 다음 ID 카운터 (단일 행)

    id = Column(Integer, primary_key=True)
    next_id = Column(Integer, nullable=False, default=0)
