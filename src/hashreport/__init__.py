from .errors import HashReportError, UsageError, MalformedInputError, OutputWriteError
from .source.csv_report import InputRecord, read_csv_report, parse_csv_report
from .aggregate import Occurrence, HashGroup, HashAggregate, ingest
from .report.writer import ReportWriter, ReportSummary
from .comparison import HashComparison
from .settings import ReportSettings
