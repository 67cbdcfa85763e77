from fastapi import Request

from services.analysis_service import BioMatchEngine


def get_biomatch_engine(request: Request) -> BioMatchEngine:
    return request.app.state.biomatch_engine
