# -*- coding: utf-8 -*-
from .oracle import LLMOracle
from .schema import Oracle, OracleRequest, VerifyPolicy
from .skill import IntegrityVerifySkill

__all__ = ["IntegrityVerifySkill", "LLMOracle", "Oracle", "OracleRequest", "VerifyPolicy"]
