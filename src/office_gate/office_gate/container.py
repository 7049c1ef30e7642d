from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from .common.datetime_utils import monotonic_seconds, now_epoch_seconds
from .core.constants import (
    DEFAULT_HTTP_TIMEOUT_SECONDS,
    DEFAULT_IPINFO_URL,
    DEFAULT_PASS_TTL_SECONDS,
    DEFAULT_SETTINGS_CACHE_TTL_SECONDS,
)
from .core.enums import SettingsBackend
from .core.exceptions import ConfigurationError
from .gate.service import AdmissionService, CheckinGuardService, NetworkGateService
from .network.address import AddressResolver, TrustPolicy
from .network.allowlist import AllowlistEvaluator, normalize_string_list
from .network.asn_lookup import AsnLookup, IpinfoAsnLookup
from .passes.signer import OfficePassSigner
from .settings.cache import SettingsCache
from .settings.repository import SettingsRepository
from .settings.service import OfficeSettingsService


@dataclass(frozen=True)
class Container:
    settings_repo: SettingsRepository
    asn_lookup: AsnLookup

    office_settings_service: OfficeSettingsService
    settings_cache: SettingsCache
    pass_signer: OfficePassSigner
    address_resolver: AddressResolver

    network_gate: NetworkGateService
    admission_service: AdmissionService
    checkin_guard_service: CheckinGuardService


def _build_settings_repo(config: Mapping[str, Any]) -> SettingsRepository:
    backend = str(config.get("SETTINGS_BACKEND") or SettingsBackend.REST.value).lower()

    if backend == SettingsBackend.MYSQL.value:
        # Imported lazily so REST deployments do not need a MySQL driver configured.
        from .database.connection import DBConfig, DatabaseConnection
        from .settings.mysql_settings_repository import MySQLSettingsRepository

        return MySQLSettingsRepository(DatabaseConnection(DBConfig.from_dict(dict(config.get("DB_CONFIG") or {}))))

    if backend == SettingsBackend.REST.value:
        from .settings.rest_settings_repository import RestSettingsRepository

        return RestSettingsRepository(
            config.get("SUPABASE_URL"),
            config.get("SUPABASE_ANON_KEY"),
            timeout=float(config.get("SETTINGS_FETCH_TIMEOUT", DEFAULT_HTTP_TIMEOUT_SECONDS)),
        )

    raise ConfigurationError(f"Unknown SETTINGS_BACKEND {backend!r}")


def build_container(
    *,
    config: Mapping[str, Any],
    settings_repo: Optional[SettingsRepository] = None,
    asn_lookup: Optional[AsnLookup] = None,
    wall_clock: Callable[[], float] = now_epoch_seconds,
    cache_clock: Callable[[], float] = monotonic_seconds,
) -> Container:
    settings_repo = settings_repo or _build_settings_repo(config)
    asn_lookup = asn_lookup or IpinfoAsnLookup(
        config.get("IPINFO_TOKEN"),
        base_url=str(config.get("IPINFO_URL") or DEFAULT_IPINFO_URL),
        timeout=float(config.get("ASN_LOOKUP_TIMEOUT", DEFAULT_HTTP_TIMEOUT_SECONDS)),
    )

    office_settings_service = OfficeSettingsService(settings_repo)
    settings_cache = SettingsCache(
        office_settings_service.load,
        ttl_seconds=float(config.get("SETTINGS_CACHE_TTL", DEFAULT_SETTINGS_CACHE_TTL_SECONDS)),
        clock=cache_clock,
    )
    pass_signer = OfficePassSigner(config.get("OFFICE_PASS_SECRET"), clock=wall_clock)
    address_resolver = AddressResolver(
        TrustPolicy.from_cidrs(
            cdn_cidrs=normalize_string_list(config.get("TRUSTED_CDN_CIDRS")),
            proxy_cidrs=normalize_string_list(config.get("TRUSTED_PROXY_CIDRS")),
        )
    )

    network_gate = NetworkGateService(
        address_resolver,
        settings_cache,
        asn_lookup,
        AllowlistEvaluator(deny_when_unconfigured=bool(config.get("DENY_WHEN_UNCONFIGURED", False))),
    )
    admission_service = AdmissionService(
        network_gate,
        pass_signer,
        pass_ttl=int(config.get("OFFICE_PASS_TTL", DEFAULT_PASS_TTL_SECONDS)),
    )
    checkin_guard_service = CheckinGuardService(network_gate, pass_signer, gate_key=config.get("OFFICE_GATE_KEY"))

    return Container(
        settings_repo=settings_repo,
        asn_lookup=asn_lookup,
        office_settings_service=office_settings_service,
        settings_cache=settings_cache,
        pass_signer=pass_signer,
        address_resolver=address_resolver,
        network_gate=network_gate,
        admission_service=admission_service,
        checkin_guard_service=checkin_guard_service,
    )
