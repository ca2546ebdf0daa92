import argparse
import getpass
import json
import sys
from pathlib import Path

from lexigem.analysis.classifier import KeywordDocumentClassifier
from lexigem.analysis.exceptions import AnalysisError
from lexigem.chat.assistant import DocumentContext, LegalChatAssistant
from lexigem.config.settings import Settings
from lexigem.documents.exceptions import DocumentLoadError
from lexigem.documents.file_loader import FileLoader
from lexigem.llm.factory import ModelClientFactory
from lexigem.logging.logger import Log
from lexigem.pdf.exceptions import PdfError
from lexigem.persistence.connection import close_client, init_client
from lexigem.persistence.repositories.chat_repository import ChatRepository
from lexigem.processor.processor import build_processor

LOCAL_OWNER_ID = "local"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lexigem", description="Legal document assistant")
    parser.add_argument("--language", help="Response language (defaults to RESPONSE_LANGUAGE)")
    parser.add_argument(
        "--owner-id",
        help="Supabase user ID; when given, results are stored for this user",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    analyze = commands.add_parser("analyze", help="Analyze a document")
    analyze.add_argument("path", type=Path)

    ask = commands.add_parser("ask", help="Ask a general legal question")
    ask.add_argument("question")
    ask.add_argument("--session-id", help="Continue a stored chat session")
    ask.add_argument("--context-file-name", help="Name of an analyzed document to refer to")
    ask.add_argument("--context-summary", help="Summary of that document")
    return parser


def _prompt_password(attempt: int) -> str | None:
    label = "PDF password: " if attempt == 1 else "Invalid password, try again: "
    try:
        return getpass.getpass(label)
    except (EOFError, KeyboardInterrupt):
        return None


def _run_analyze(args: argparse.Namespace, settings: Settings, language: str) -> int:
    file = FileLoader(max_bytes=settings.max_upload_bytes).load(args.path)
    processor = build_processor(settings, with_persistence=args.owner_id is not None)
    processed = processor.process(
        file,
        response_language=language,
        owner_id=args.owner_id,
        password_provider=_prompt_password,
    )

    classifier = KeywordDocumentClassifier()
    output = processed.analysis.to_dict()
    output["isLegal"] = classifier.is_legal(processed.analysis)
    output["authenticity"] = classifier.authenticity(processed.analysis).value
    if processed.record is not None:
        output["documentId"] = processed.record.id
    print(json.dumps(output, indent=2, ensure_ascii=False))
    return 0


def _run_ask(args: argparse.Namespace, settings: Settings, language: str) -> int:
    client_factory = ModelClientFactory(settings)
    assistant = LegalChatAssistant(
        client=client_factory.get_client(),
        model=client_factory.model_name(),
        temperature=settings.analysis_temperature,
        chat_repo=ChatRepository() if args.owner_id is not None else None,
        retry_delay_seconds=settings.chat_retry_delay_seconds,
    )
    owner_id = args.owner_id or LOCAL_OWNER_ID

    session_id = args.session_id
    if session_id is None:
        session_id = assistant.start_session(owner_id)
        history = []
    else:
        history = assistant.load_history(owner_id, session_id)

    context = None
    if args.context_file_name and args.context_summary:
        context = DocumentContext(file_name=args.context_file_name, summary=args.context_summary)

    reply = assistant.ask(
        owner_id,
        session_id,
        args.question,
        history=history,
        response_language=language,
        context_document=context,
    )
    print(reply.text)
    print(f"\n[session {reply.session_id}]", file=sys.stderr)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point: load settings -> wire adapters -> run one command."""
    args = _build_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level, stream=sys.stderr)
    language = args.language or settings.response_language

    if args.owner_id is not None:
        init_client(settings)
    try:
        if args.command == "analyze":
            return _run_analyze(args, settings, language)
        return _run_ask(args, settings, language)
    except (AnalysisError, PdfError, DocumentLoadError) as exc:
        print(exc.user_message, file=sys.stderr)
        return 1
    except (FileNotFoundError, ValueError) as exc:
        print(str(exc), file=sys.stderr)
        return 2
    finally:
        close_client()


if __name__ == "__main__":
    sys.exit(main())
