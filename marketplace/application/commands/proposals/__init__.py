from marketplace.application.commands.proposals.submit_proposal import (
    SubmitProposalCommand,
    SubmitProposalHandler,
)

__all__ = ["SubmitProposalCommand", "SubmitProposalHandler"]
