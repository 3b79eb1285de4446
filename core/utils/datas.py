"""
Utilitários de data e fuso horário.

Datas são gravadas no MongoDB como datetime UTC sem tzinfo. Os limites de
"dia" seguem o fuso configurado em settings.TIME_ZONE (America/Sao_Paulo
por padrão), que é a data que o caixa da barbearia enxerga.
"""
from datetime import datetime, date, time
from typing import Optional, Tuple, Union

import pytz
from dateutil import parser
from django.conf import settings


def get_timezone():
    """Fuso local da aplicação."""
    return pytz.timezone(getattr(settings, 'TIME_ZONE', 'America/Sao_Paulo'))


def agora_utc() -> datetime:
    """Agora em UTC, sem tzinfo (formato gravado no MongoDB)."""
    return datetime.now(pytz.utc).replace(tzinfo=None)


def hoje_local() -> date:
    """Data de hoje no fuso local."""
    return datetime.now(get_timezone()).date()


def para_utc(dt: datetime) -> datetime:
    """
    Converte um datetime para UTC sem tzinfo.

    Datetimes sem tzinfo são interpretados no fuso local.
    """
    if dt.tzinfo is None:
        dt = get_timezone().localize(dt)
    return dt.astimezone(pytz.utc).replace(tzinfo=None)


def para_local(dt: datetime) -> datetime:
    """Converte um datetime UTC (sem tzinfo) para o fuso local."""
    if dt.tzinfo is None:
        dt = pytz.utc.localize(dt)
    return dt.astimezone(get_timezone())


def limites_do_dia(dia: Optional[date] = None) -> Tuple[datetime, datetime]:
    """
    Retorna (inicio, fim) do dia local, 00:00:00 até 23:59:59.999999, em UTC.

    Args:
        dia: Data local (None para hoje)
    """
    dia = dia or hoje_local()
    inicio = para_utc(datetime.combine(dia, time.min))
    fim = para_utc(datetime.combine(dia, time.max))
    return inicio, fim


def parse_data(valor: Union[str, datetime, date, None],
               fim_do_dia: bool = False) -> Optional[datetime]:
    """
    Interpreta uma data vinda da API ('YYYY-MM-DD', ISO completo ou objeto).

    Args:
        valor: Data a interpretar
        fim_do_dia: Para datas sem hora, usa 23:59:59.999999 em vez de 00:00

    Returns:
        datetime UTC sem tzinfo, ou None se valor vazio

    Raises:
        ValueError: Se a string não for uma data reconhecível
    """
    if valor is None or valor == '':
        return None

    if isinstance(valor, datetime):
        return para_utc(valor)

    if isinstance(valor, date):
        return para_utc(datetime.combine(valor, time.max if fim_do_dia else time.min))

    texto = str(valor).strip()
    try:
        dt = parser.isoparse(texto)
    except ValueError:
        dt = parser.parse(texto, dayfirst=True)

    if fim_do_dia and len(texto) <= 10:
        dt = datetime.combine(dt.date(), time.max)
    return para_utc(dt)


def parse_dia(valor: Union[str, date, None]) -> Optional[date]:
    """
    Interpreta uma data de calendário local ('YYYY-MM-DD' ou 'DD/MM/YYYY').

    Returns:
        date ou None se valor vazio

    Raises:
        ValueError: Se a string não for uma data reconhecível
    """
    if valor is None or valor == '':
        return None
    if isinstance(valor, datetime):
        return valor.date()
    if isinstance(valor, date):
        return valor

    texto = str(valor).strip()
    try:
        return parser.isoparse(texto).date()
    except ValueError:
        return parser.parse(texto, dayfirst=True).date()
