"""
ERP 코어 - 택배사

택배사 별칭(한글/영문)을 하나의 택배사 정보로 매핑하고 배송 추적 URL 을 만듭니다.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional
from urllib.parse import quote
import logging
import re

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Carrier:
    """택배사 정보"""
    code: str
    name: str
    url_template: str

    def tracking_url(self, tracking_number: str) -> str:
        """운송장 번호를 넣은 추적 URL"""
        return self.url_template.format(tracking_number=quote(tracking_number.strip(), safe=""))


CJ = Carrier("cj", "CJ대한통운",
             "https://www.cjlogistics.com/ko/tool/parcel/tracking?gnbInvcNo={tracking_number}")
HANJIN = Carrier("hanjin", "한진택배",
                 "https://www.hanjin.com/kor/CMS/DeliveryMgr/WaybillResult.do"
                 "?mCode=MN038&schLang=KR&wblnumText2={tracking_number}")
LOTTE = Carrier("lotte", "롯데택배",
                "https://www.lotteglogis.com/home/reservation/tracking/linkView?InvNo={tracking_number}")
KOREA_POST = Carrier("post", "우체국택배",
                     "https://service.epost.go.kr/trace.RetrieveDomRigiTraceList.comm?sid1={tracking_number}")
EMS = Carrier("ems", "우체국EMS",
              "https://service.epost.go.kr/trace.RetrieveEmsTrace.comm?POST_CODE={tracking_number}")
LOGEN = Carrier("logen", "로젠택배",
                "https://www.ilogen.com/web/personal/trace/{tracking_number}")
KUNYOUNG = Carrier("kunyoung", "건영택배",
                   "https://www.kunyoung.com/goods/goods_01.php?mulno={tracking_number}")
DHL = Carrier("dhl", "DHL",
              "https://www.dhl.com/kr-ko/home/tracking/tracking-express.html"
              "?submit=1&tracking-id={tracking_number}")
FEDEX = Carrier("fedex", "FedEx", "https://www.fedex.com/fedextrack/?tracknumbers={tracking_number}")
UPS = Carrier("ups", "UPS", "https://www.ups.com/track?loc=ko_KR&tracknum={tracking_number}")

# 정규화된 별칭 집합 → 택배사
_ALIASES: Dict[FrozenSet[str], Carrier] = {
    frozenset({"cj", "cj대한통운", "대한통운", "cjlogistics", "cj logistics"}): CJ,
    frozenset({"hanjin", "한진", "한진택배"}): HANJIN,
    frozenset({"lotte", "롯데", "롯데택배", "lotteglogis", "롯데글로벌로지스"}): LOTTE,
    frozenset({"post", "koreapost", "epost", "우체국", "우체국택배"}): KOREA_POST,
    frozenset({"ems", "우체국ems", "koreapostems"}): EMS,
    frozenset({"logen", "ilogen", "로젠", "로젠택배"}): LOGEN,
    frozenset({"kunyoung", "건영", "건영택배"}): KUNYOUNG,
    frozenset({"dhl"}): DHL,
    frozenset({"fedex", "페덱스"}): FEDEX,
    frozenset({"ups"}): UPS,
}


def _normalize(name: str) -> str:
    return re.sub(r"[\s_\-.]", "", name).casefold()


_LOOKUP: Dict[str, Carrier] = {
    _normalize(alias): carrier
    for aliases, carrier in _ALIASES.items()
    for alias in aliases
}

CARRIERS = tuple(dict.fromkeys(_ALIASES.values()))


def find_carrier(name: Optional[str]) -> Optional[Carrier]:
    """
    택배사 조회 (대소문자, 공백 무시)

    Args:
        name: 택배사 이름 또는 별칭

    Returns:
        Carrier, 알 수 없는 택배사이면 None
    """
    if not name or not isinstance(name, str):
        return None
    return _LOOKUP.get(_normalize(name))


def build_tracking_url(courier: Optional[str], tracking_number: Optional[str]) -> Optional[str]:
    """
    배송 추적 URL 생성

    주문 상세 화면 렌더링을 막지 않도록 실패 시 예외 대신 None 을 반환합니다.
    """
    if not tracking_number or not str(tracking_number).strip():
        return None

    carrier = find_carrier(courier)
    if carrier is None:
        logger.debug(f"알 수 없는 택배사: {courier}")
        return None

    return carrier.tracking_url(str(tracking_number))
