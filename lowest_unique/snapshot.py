def serialize_seats(registry, rounds):
    players = []
    for seat in registry.ordered():
        players.append(
            {
                "id": seat.seat_id,
                "name": seat.name,
                "hasName": seat.has_custom_name,
                "choice": seat.choice if rounds.choices_visible else None,
                "hasChosen": seat.choice is not None,
                "eliminated": seat.eliminated,
                "connected": seat.connected,
            }
        )
    return players


def state_payload(registry, rounds, history):
    """Public game state, identical for every receiver."""
    return {
        "round": rounds.round_number,
        "players": serialize_seats(registry, rounds),
        "winners": list(rounds.winners),
        "choicesVisible": rounds.choices_visible,
        "maxPlayers": registry.max_seats,
        "joinedCount": len(registry),
        "activeCount": len(registry.active_seats()),
        "roundActive": rounds.accepting_choices,
        "history": [entry.to_payload() for entry in history],
    }


def player_info_payload(seat, min_number, max_number):
    return {
        "seatId": seat.seat_id,
        "name": seat.name,
        "minNumber": min_number,
        "maxNumber": max_number,
    }


def round_result_payload(settlement):
    return {
        "round": settlement.round,
        "hasWinner": settlement.has_winner,
        "lowestUnique": settlement.lowest_unique,
        "winners": list(settlement.winner_ids),
        "winnerNames": list(settlement.winner_names),
        "message": settlement.message,
    }
