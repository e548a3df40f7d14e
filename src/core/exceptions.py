"""src.core.exceptions
커스텀 예외 정의 (Spring CustomException 스타일)

- InvalidUrlError: 잘못된 입력 URL (호출자에게 즉시 전파)
- ProviderResponseError: 외부 Provider 응답 이상 (Provider 내부에서 흡수)
- ClassifierResponseError: LLM 응답 파싱 실패 (해당 파이프라인 실행 실패)
"""


class CustomError(Exception):
    """
    커스텀 예외 (Spring의 CustomException 스타일)

    간단하게 에러 메시지만 전달하여 사용합니다.

    Examples:
        >>> raise CustomError("비디오 다운로드에 실패했습니다")
        >>> raise CustomError("LLM 응답 생성에 실패했습니다")

    Usage:
        try:
            process_video(url)
        except CustomError as e:
            logger.error(f"처리 실패: {e.message}", exc_info=True)
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

    def __str__(self):
        return self.message


class InvalidUrlError(CustomError):
    """지원하지 않는 플랫폼이거나 식별자를 추출할 수 없는 URL"""


class ProviderResponseError(CustomError):
    """외부 Provider가 예상과 다른 형태의 응답을 반환한 경우"""


class ClassifierResponseError(CustomError):
    """LLM 응답에서 JSON 객체를 추출/검증하지 못한 경우"""
